"""Tests for the visibility gate state machine."""

import logging

from weight_progress.gate import (
    CODE_CORRECT_MESSAGE,
    CODE_WRONG_MESSAGE,
    GATE_CLOSED,
    GATE_OPEN,
    NO_CODE_MESSAGE,
    VisibilityGate,
)


class TestSubmitCode:
    def test_starts_closed(self):
        assert VisibilityGate().state == GATE_CLOSED

    def test_wrong_code_stays_closed(self):
        gate = VisibilityGate()
        result = gate.submit_code("wrong", "abc")
        assert not result.opened
        assert result.message == CODE_WRONG_MESSAGE
        assert gate.state == GATE_CLOSED

    def test_matching_code_opens(self):
        gate = VisibilityGate()
        result = gate.submit_code("abc", "abc")
        assert result.opened
        assert result.message == CODE_CORRECT_MESSAGE
        assert gate.is_open

    def test_comparison_is_exact(self):
        gate = VisibilityGate()
        assert not gate.submit_code("ABC", "abc").opened
        assert not gate.submit_code(" abc", "abc").opened

    def test_unlimited_retries(self):
        gate = VisibilityGate()
        for _ in range(20):
            gate.submit_code("nope", "abc")
        assert gate.submit_code("abc", "abc").opened

    def test_no_code_configured_never_opens(self):
        gate = VisibilityGate()
        result = gate.submit_code("", "")
        assert not result.opened
        assert result.message == NO_CODE_MESSAGE

    def test_mismatch_while_open_closes(self):
        gate = VisibilityGate()
        gate.submit_code("abc", "abc")
        gate.submit_code("wrong", "abc")
        assert gate.state == GATE_CLOSED

    def test_entered_code_buffered(self):
        gate = VisibilityGate()
        gate.submit_code("wrong", "abc")
        assert gate.entered_code == "wrong"

    def test_logs_without_code(self, caplog):
        caplog.set_level(logging.INFO, logger="weight_progress.gate")
        VisibilityGate().submit_code("secret-guess", "abc", profile_id=3)
        [record] = caplog.records
        assert record.wp_profile_id == 3
        assert record.wp_gate_state == GATE_CLOSED
        assert "secret-guess" not in caplog.text


class TestHide:
    def test_hide_closes_and_clears(self):
        gate = VisibilityGate()
        gate.submit_code("abc", "abc")
        gate.hide()
        assert gate.state == GATE_CLOSED
        assert gate.entered_code == ""

    def test_reset_from_open(self):
        gate = VisibilityGate()
        gate.submit_code("abc", "abc")
        assert gate.state == GATE_OPEN
        gate.reset()
        assert gate.state == GATE_CLOSED
