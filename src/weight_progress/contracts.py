"""Input contracts: pydantic validation for raw presentation input.

Form values arrive as numbers or as the strings a user typed. These models
decide what counts as a usable weight, profile name or private code before
any state is touched. Callers get ``Rejection`` values, never
``pydantic.ValidationError``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import Rejection


def _reject_bool(v: Any) -> Any:
    # bool is an int subclass; lax float coercion would read True as 1.0
    if isinstance(v, bool):
        raise ValueError("weight must be a number, not a boolean")
    return v


class WeightInput(BaseModel):
    """A body weight: positive and finite. Numeric strings are coerced."""

    value: float = Field(gt=0, allow_inf_nan=False)

    @field_validator("value", mode="before")
    @classmethod
    def value_not_bool(cls, v: Any) -> Any:
        return _reject_bool(v)


class ProfileNameInput(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v


class StartWeightInput(BaseModel):
    """Baseline weight plus the private code that guards raw values.

    The code is kept verbatim; only its stripped emptiness is checked here.
    """

    weight: float = Field(gt=0, allow_inf_nan=False)
    code: str

    @field_validator("weight", mode="before")
    @classmethod
    def weight_not_bool(cls, v: Any) -> Any:
        return _reject_bool(v)


def _first_error(exc: ValidationError) -> dict[str, Any]:
    errors = exc.errors()
    return errors[0] if errors else {}


def parse_weight(raw: Any, *, field: str = "weight") -> float | Rejection:
    """Validate a raw weight, returning the float or an ``invalid_weight`` rejection."""
    try:
        return WeightInput.model_validate({"value": raw}).value
    except ValidationError as exc:
        return Rejection(
            code="invalid_weight",
            message=_first_error(exc).get("msg", "weight must be a positive number"),
            field=field,
        )


def parse_profile_name(raw: Any) -> str | Rejection:
    try:
        return ProfileNameInput.model_validate({"name": raw}).name
    except ValidationError as exc:
        return Rejection(
            code="empty_name",
            message=_first_error(exc).get("msg", "name must not be empty"),
            field="name",
        )


def parse_start_weight(raw_weight: Any, raw_code: Any) -> StartWeightInput | Rejection:
    """Validate a start-weight commit.

    Weight problems win over a missing code, matching the order in which the
    form is checked. A blank code yields a ``missing_code`` rejection.
    """
    weight = parse_weight(raw_weight)
    if isinstance(weight, Rejection):
        return weight
    code = raw_code if isinstance(raw_code, str) else ""
    if not code.strip():
        return Rejection(code="missing_code", message="code must not be empty", field="code")
    return StartWeightInput(weight=weight, code=code)
