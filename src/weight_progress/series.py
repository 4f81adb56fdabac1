"""Measurement series operations, scoped to one profile.

The series is append-only: entries are kept in the order they were recorded,
never sorted by date and never de-duplicated, so several weigh-ins on the same
day all survive. The start weight is set once; the first measurement is seeded
from it.
"""

from __future__ import annotations

import logging

from .clock import Clock
from .contracts import parse_start_weight, parse_weight
from .errors import Outcome, Rejection
from .models import Measurement, Profile

logger = logging.getLogger(__name__)

MISSING_CODE_MESSAGE = "Please create a private code."
START_WEIGHT_SAVED_MESSAGE = "Start weight and code saved!"
START_WEIGHT_MISSING_MESSAGE = "Set a start weight before recording progress."


def _reject(profile: Profile, rejection: Rejection) -> Outcome:
    logger.info(
        "Rejected series update for profile %d: %s",
        profile.id,
        rejection.code,
        extra={"wp_profile_id": profile.id, "wp_error_code": rejection.code},
    )
    return Outcome(ok=False, profile=profile, rejection=rejection)


def commit_start_weight(profile: Profile, weight: object, code: object, clock: Clock) -> Outcome:
    """Set the baseline weight and private code.

    Once a start weight exists it is never changed again, but the code is
    overwritten on every successful call. The seed measurement is appended only
    while the series is still empty.
    """
    parsed = parse_start_weight(weight, code)
    if isinstance(parsed, Rejection):
        if parsed.code == "missing_code":
            parsed = Rejection(code=parsed.code, message=MISSING_CODE_MESSAGE, field=parsed.field)
        return _reject(profile, parsed)

    if profile.start_weight is None:
        profile.start_weight = parsed.weight
    # TODO: require the previous code before replacing it once profiles outlive a session.
    profile.visibility_code = parsed.code
    if not profile.measurements:
        profile.measurements.append(Measurement(date=clock.today(), weight=parsed.weight))

    logger.info(
        "Committed start weight for profile %d",
        profile.id,
        extra={"wp_profile_id": profile.id, "wp_measurement_count": len(profile.measurements)},
    )
    return Outcome.accepted(profile)


def add_measurement(profile: Profile, weight: object, clock: Clock) -> Outcome:
    """Append a weigh-in dated today. Requires a start weight."""
    parsed = parse_weight(weight)
    if isinstance(parsed, Rejection):
        return _reject(profile, parsed)
    if profile.start_weight is None:
        return _reject(
            profile,
            Rejection(code="start_weight_missing", message=START_WEIGHT_MISSING_MESSAGE, field="start_weight"),
        )

    profile.measurements.append(Measurement(date=clock.today(), weight=parsed))
    logger.debug(
        "Recorded measurement for profile %d",
        profile.id,
        extra={"wp_profile_id": profile.id, "wp_measurement_count": len(profile.measurements)},
    )
    return Outcome.accepted(profile)
