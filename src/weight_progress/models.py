"""Core data models for weight progress tracking."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any


@dataclass(frozen=True)
class Measurement:
    """One weigh-in: a calendar day and a positive weight."""

    date: date
    weight: float


@dataclass
class Profile:
    """A tracked person, mutated only through ``weight_progress.series``.

    Whether a profile is active is owned by the registry, not stored here.
    """

    id: int
    name: str
    start_weight: float | None = None
    visibility_code: str = ""
    measurements: list[Measurement] = field(default_factory=list)

    @property
    def has_start_weight(self) -> bool:
        return self.start_weight is not None


@dataclass(frozen=True)
class DerivedRecord:
    """A measurement augmented with percent-change metrics.

    ``display_weight`` is ``None`` while the visibility gate is closed; the
    percentages are always computed from the true weights.
    """

    date: date
    weight: float
    change_from_prev: float
    change_from_start: float
    display_weight: float | None = None

    @property
    def weight_visible(self) -> bool:
        return self.display_weight is not None

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe rendering. Raw ``weight`` is only included when visible."""
        result: dict[str, Any] = {
            "date": self.date.isoformat(),
            "change_from_prev": self.change_from_prev,
            "change_from_start": self.change_from_start,
            "display_weight": self.display_weight,
        }
        if self.weight_visible:
            result["weight"] = self.weight
        return result
