"""Derivation engine: percent-change metrics over a measurement series.

Pure functions, recomputed on every read. Percentages are always derived from
the true weights; the visibility gate only decides whether ``display_weight``
carries the raw value.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from .models import DerivedRecord, Measurement, Profile

MASKED_WEIGHT = "***"
HUNDREDTHS = Decimal("0.01")

ChangeDirection = Literal["gain", "loss_or_flat"]


def percent_change(value: float, reference: float) -> float:
    """(value - reference) / reference * 100, rounded to 2 decimals.

    Exact binary ties round away from zero (0.625 -> 0.63, -0.625 -> -0.63);
    ``Decimal(float)`` keeps the exact binary value, so near-ties like 1.005
    (stored just below) still round down.
    """
    raw = (value - reference) / reference * 100
    rounded = float(Decimal(raw).quantize(HUNDREDTHS, rounding=ROUND_HALF_UP))
    # -0.0 -> 0.0
    return rounded if rounded else 0.0


def derive(
    measurements: Sequence[Measurement],
    start_weight: float | None,
    *,
    gate_open: bool = False,
) -> list[DerivedRecord]:
    """Map a series to derived records, one per measurement, in series order."""
    if not measurements or start_weight is None:
        return []

    records: list[DerivedRecord] = []
    for i, m in enumerate(measurements):
        prev_weight = measurements[i - 1].weight if i > 0 else m.weight
        records.append(
            DerivedRecord(
                date=m.date,
                weight=m.weight,
                change_from_prev=percent_change(m.weight, prev_weight) if i > 0 else 0.0,
                change_from_start=percent_change(m.weight, start_weight),
                display_weight=m.weight if gate_open else None,
            )
        )
    return records


def derive_series(profile: Profile, *, gate_open: bool = False) -> list[DerivedRecord]:
    return derive(profile.measurements, profile.start_weight, gate_open=gate_open)


def format_change(value: float) -> str:
    """Signed percentage label; only strictly positive changes get a '+'."""
    sign = "+" if value > 0 else ""
    return f"{sign}{value}%"


def change_direction(value: float) -> ChangeDirection:
    return "gain" if value > 0 else "loss_or_flat"


def format_weight(record: DerivedRecord) -> str:
    if record.display_weight is None:
        return MASKED_WEIGHT
    return f"{record.display_weight} kg"
