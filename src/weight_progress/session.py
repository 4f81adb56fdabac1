"""Session controller, the single owner of registry, gate and input buffers.

Every user action enters through one method here. Any change of the active
profile closes the visibility gate and clears the transient inputs before the
method returns, so ``current_view()`` never shows one profile's raw weights
under another profile's unlock.

Single-threaded and synchronous: no method blocks and none is safe under
interleaved calls from several threads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from . import series
from .clock import Clock, SystemClock
from .config import Config
from .derivation import derive_series
from .errors import Outcome
from .gate import GATE_CLOSED, GateResult, GateState, VisibilityGate
from .models import DerivedRecord, Profile
from .registry import ProfileRegistry

logger = logging.getLogger(__name__)

NO_ACTIVE_PROFILE_MESSAGE = "No active profile."


@dataclass
class SessionInputs:
    """Form buffers a presentation layer may stage before triggering an action."""

    new_profile_name: str = ""
    pending_weight: Any = ""
    pending_code: str = ""
    entered_code: str = ""


@dataclass(frozen=True)
class ProfileView:
    id: int
    name: str
    active: bool
    has_start_weight: bool = False
    measurement_count: int = 0
    start_weight: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "active": self.active,
            "has_start_weight": self.has_start_weight,
            "measurement_count": self.measurement_count,
            "start_weight": self.start_weight,
        }


@dataclass(frozen=True)
class SessionView:
    profile: ProfileView | None
    records: list[DerivedRecord]
    gate_state: GateState
    message: str | None
    profiles: list[ProfileView] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "profile": self.profile.to_dict() if self.profile else None,
            "profiles": [p.to_dict() for p in self.profiles],
            "records": [r.to_dict() for r in self.records],
            "gate_state": self.gate_state,
            "message": self.message,
        }


class SessionController:
    def __init__(
        self,
        registry: ProfileRegistry | None = None,
        *,
        clock: Clock | None = None,
    ) -> None:
        self.registry = registry if registry is not None else ProfileRegistry()
        self.clock: Clock = clock if clock is not None else SystemClock()
        self.gate = VisibilityGate()
        self.inputs = SessionInputs()
        self.message: str | None = None

        # Initial load defaults to the first profile.
        if self.registry.get_active() is None and len(self.registry) > 0:
            self.switch_active(self.registry.profiles[0].id)

    @classmethod
    def from_config(cls, config: Config, *, clock: Clock | None = None) -> SessionController:
        registry = ProfileRegistry()
        for name in config.default_profiles:
            registry.add_profile(name)
        return cls(registry, clock=clock if clock is not None else SystemClock(config.timezone))

    # --- profiles ---

    def add_profile(self, name: str | None = None) -> Outcome:
        outcome = self.registry.add_profile(self.inputs.new_profile_name if name is None else name)
        if outcome.ok:
            self.inputs.new_profile_name = ""
        return outcome

    def switch_active(self, profile_id: int) -> Outcome:
        outcome = self.registry.switch_active(profile_id)
        if outcome.ok:
            self._reset_transient_state()
        return outcome

    def active_profile(self) -> Profile | None:
        return self.registry.get_active()

    def _reset_transient_state(self) -> None:
        self.gate.reset()
        self.inputs.entered_code = ""
        self.inputs.pending_weight = ""
        self.message = None

    # --- measurements ---

    def _no_active_profile(self) -> Outcome:
        logger.info("No active profile for update", extra={"wp_error_code": "no_active_profile"})
        return Outcome.rejected("no_active_profile", NO_ACTIVE_PROFILE_MESSAGE)

    def commit_start_weight(self, weight: Any = None, code: str | None = None) -> Outcome:
        profile = self.active_profile()
        if profile is None:
            return self._no_active_profile()

        outcome = series.commit_start_weight(
            profile,
            self.inputs.pending_weight if weight is None else weight,
            self.inputs.pending_code if code is None else code,
            self.clock,
        )
        if outcome.ok:
            self.message = series.START_WEIGHT_SAVED_MESSAGE
        elif outcome.error_class == "missing_code":
            self.message = outcome.rejection.message
        else:
            self.message = None
        return outcome

    def add_measurement(self, weight: Any = None) -> Outcome:
        profile = self.active_profile()
        if profile is None:
            return self._no_active_profile()

        outcome = series.add_measurement(
            profile,
            self.inputs.pending_weight if weight is None else weight,
            self.clock,
        )
        if outcome.ok:
            self.inputs.pending_weight = ""
        return outcome

    # --- visibility ---

    def submit_code(self, entered: str | None = None) -> GateResult:
        entered = self.inputs.entered_code if entered is None else entered
        profile = self.active_profile()
        expected = profile.visibility_code if profile is not None else ""
        result = self.gate.submit_code(entered, expected, profile_id=profile.id if profile else None)
        self.inputs.entered_code = entered
        self.message = result.message
        return result

    def hide(self) -> None:
        self.gate.hide()
        self.inputs.entered_code = ""
        self.message = None

    # --- read path ---

    def _profile_view(self, profile: Profile, *, detailed: bool) -> ProfileView:
        if not detailed:
            return ProfileView(id=profile.id, name=profile.name, active=self.registry.is_active(profile.id))
        return ProfileView(
            id=profile.id,
            name=profile.name,
            active=self.registry.is_active(profile.id),
            has_start_weight=profile.has_start_weight,
            measurement_count=len(profile.measurements),
            start_weight=profile.start_weight if self.gate.is_open else None,
        )

    def derive_series(self, profile: Profile | None = None) -> list[DerivedRecord]:
        profile = profile if profile is not None else self.active_profile()
        if profile is None:
            return []
        gate_open = self.gate.is_open and self.registry.is_active(profile.id)
        return derive_series(profile, gate_open=gate_open)

    def current_view(self) -> SessionView:
        profile = self.active_profile()
        return SessionView(
            profile=self._profile_view(profile, detailed=True) if profile else None,
            records=self.derive_series(profile) if profile else [],
            gate_state=self.gate.state if profile else GATE_CLOSED,
            message=self.message,
            profiles=[self._profile_view(p, detailed=False) for p in self.registry],
        )
