"""Profile registry: the collection of tracked profiles and which one is active.

Activity is a single ``active_id`` rather than a flag on every profile, so the
exactly-one-active invariant holds by construction once a switch happened.
"""

from __future__ import annotations

import logging

from .contracts import parse_profile_name
from .errors import Outcome, Rejection
from .models import Profile

logger = logging.getLogger(__name__)


class ProfileRegistry:
    def __init__(self) -> None:
        self._profiles: list[Profile] = []
        self.active_id: int | None = None

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self):
        return iter(self._profiles)

    @property
    def profiles(self) -> list[Profile]:
        return list(self._profiles)

    def next_id(self) -> int:
        """Max existing id + 1, or 1 for an empty registry."""
        return max((p.id for p in self._profiles), default=0) + 1

    def get(self, profile_id: int) -> Profile | None:
        for profile in self._profiles:
            if profile.id == profile_id:
                return profile
        return None

    def is_active(self, profile_id: int) -> bool:
        return self.active_id is not None and self.active_id == profile_id

    def add_profile(self, name: str) -> Outcome:
        """Create an inactive profile. Blank names are rejected."""
        parsed = parse_profile_name(name)
        if isinstance(parsed, Rejection):
            logger.info("Rejected profile: %s", parsed.code, extra={"wp_error_code": parsed.code})
            return Outcome(ok=False, rejection=parsed)

        # Stored as typed; only the emptiness check uses the stripped form.
        profile = Profile(id=self.next_id(), name=name)
        self._profiles.append(profile)
        logger.info("Added profile %d", profile.id, extra={"wp_profile_id": profile.id})
        return Outcome.accepted(profile)

    def switch_active(self, profile_id: int) -> Outcome:
        """Make ``profile_id`` the only active profile.

        Unknown ids leave the registry untouched; the outcome reports
        ``profile_not_found`` so callers can tell the no-op apart.
        """
        profile = self.get(profile_id)
        if profile is None:
            logger.info(
                "Switch to unknown profile %s ignored",
                profile_id,
                extra={"wp_profile_id": profile_id, "wp_error_code": "profile_not_found"},
            )
            return Outcome.rejected("profile_not_found", f"no profile with id {profile_id}", field="id")

        self.active_id = profile.id
        logger.info("Switched active profile to %d", profile.id, extra={"wp_profile_id": profile.id})
        return Outcome.accepted(profile)

    def get_active(self) -> Profile | None:
        """The active profile, or None before the first switch."""
        if self.active_id is None:
            return None
        return self.get(self.active_id)
