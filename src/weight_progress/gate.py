"""Visibility gate: decides whether raw weight values are exposed.

A privacy toggle, not authentication. The entered code is compared with the
active profile's code by exact string equality; there is no lockout and no
attempt counting.

States:
- closed: initial, and re-entered on hide and on every profile switch
- open:   after a matching code
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

logger = logging.getLogger(__name__)

GateState = Literal["closed", "open"]

GATE_CLOSED: GateState = "closed"
GATE_OPEN: GateState = "open"

CODE_CORRECT_MESSAGE = "Code correct! Weight data is now shown."
CODE_WRONG_MESSAGE = "Wrong code. Weight data stays hidden."
NO_CODE_MESSAGE = "No private code has been created for this profile yet."


@dataclass(frozen=True)
class GateResult:
    opened: bool
    message: str


class VisibilityGate:
    def __init__(self) -> None:
        self.state: GateState = GATE_CLOSED
        self.entered_code: str = ""

    @property
    def is_open(self) -> bool:
        return self.state == GATE_OPEN

    def submit_code(self, entered: str, expected: str, *, profile_id: int | None = None) -> GateResult:
        """Compare ``entered`` with ``expected``; open on exact match, close otherwise.

        A profile without a code never opens the gate.
        """
        self.entered_code = entered
        if not expected:
            result = GateResult(opened=False, message=NO_CODE_MESSAGE)
        elif entered == expected:
            result = GateResult(opened=True, message=CODE_CORRECT_MESSAGE)
        else:
            result = GateResult(opened=False, message=CODE_WRONG_MESSAGE)

        self.state = GATE_OPEN if result.opened else GATE_CLOSED
        logger.info(
            "Code check %s",
            "matched" if result.opened else "failed",
            extra={"wp_profile_id": profile_id, "wp_gate_state": self.state},
        )
        return result

    def hide(self) -> None:
        self.state = GATE_CLOSED
        self.entered_code = ""

    def reset(self) -> None:
        """Force the gate closed and clear its buffers (profile switch)."""
        self.hide()
