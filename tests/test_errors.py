"""Tests for the error taxonomy and outcome values."""

from weight_progress.errors import (
    ERROR_CLASS_BY_CODE,
    Outcome,
    Rejection,
    classify_error_code,
)
from weight_progress.models import Profile


def test_every_code_maps_to_known_class():
    assert set(ERROR_CLASS_BY_CODE.values()) == {"validation", "missing_code", "not_found"}


def test_classify_normalizes():
    assert classify_error_code("  MISSING_CODE ") == "missing_code"
    assert classify_error_code("profile_not_found") == "not_found"


def test_unknown_code_is_validation():
    assert classify_error_code("something_else") == "validation"
    assert classify_error_code(None) == "validation"


def test_accepted_outcome():
    profile = Profile(id=1, name="A")
    outcome = Outcome.accepted(profile)
    assert outcome.ok
    assert outcome.profile is profile
    assert outcome.rejection is None
    assert outcome.error_class is None


def test_rejected_outcome():
    outcome = Outcome.rejected("invalid_weight", "weight must be positive", field="weight")
    assert not outcome.ok
    assert outcome.error_class == "validation"
    assert outcome.rejection.to_dict() == {
        "code": "invalid_weight",
        "error_class": "validation",
        "field": "weight",
        "message": "weight must be positive",
    }


def test_rejection_is_frozen():
    rejection = Rejection(code="empty_name", message="x")
    try:
        rejection.code = "other"
        assert False, "Should be frozen"
    except AttributeError:
        pass
