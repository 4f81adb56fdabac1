"""Stable error taxonomy and result values for core operations.

Nothing in the core raises across its public API: every mutation returns an
``Outcome`` that is either accepted (state changed) or rejected (no state
change, with a classified reason).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from .models import Profile

ErrorClass = Literal[
    "validation",
    "missing_code",
    "not_found",
]

ERROR_CLASS_BY_CODE: dict[str, ErrorClass] = {
    "invalid_weight": "validation",
    "empty_name": "validation",
    "start_weight_missing": "validation",
    "missing_code": "missing_code",
    "profile_not_found": "not_found",
    "no_active_profile": "not_found",
}


def classify_error_code(error_code: str | None) -> ErrorClass:
    normalized = str(error_code or "").strip().lower()
    return ERROR_CLASS_BY_CODE.get(normalized, "validation")


@dataclass(frozen=True)
class Rejection:
    code: str
    message: str
    field: str | None = None

    @property
    def error_class(self) -> ErrorClass:
        return classify_error_code(self.code)

    def to_dict(self) -> dict[str, str | None]:
        return {
            "code": self.code,
            "error_class": self.error_class,
            "field": self.field,
            "message": self.message,
        }


@dataclass(frozen=True)
class Outcome:
    """Result of a core mutation.

    ``profile`` is the affected profile after the operation (or before it,
    unchanged, when rejected and a profile was in scope).
    """

    ok: bool
    profile: Profile | None = None
    rejection: Rejection | None = None

    @classmethod
    def accepted(cls, profile: Profile | None = None) -> Outcome:
        return cls(ok=True, profile=profile)

    @classmethod
    def rejected(
        cls,
        code: str,
        message: str,
        *,
        field: str | None = None,
        profile: Profile | None = None,
    ) -> Outcome:
        return cls(ok=False, profile=profile, rejection=Rejection(code=code, message=message, field=field))

    @property
    def error_class(self) -> ErrorClass | None:
        return self.rejection.error_class if self.rejection else None
