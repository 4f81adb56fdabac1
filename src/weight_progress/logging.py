"""Structured logging for the weight progress core.

Controlled via WEIGHT_PROGRESS_LOG_FORMAT env var: "json" (default) or "text".

Context travels through ``extra=`` using ``wp_``-prefixed keys
(``wp_profile_id``, ``wp_error_code``, ``wp_gate_state``). Raw weights and
visibility codes are private: keys listed in ``REDACTED_KEYS`` are masked by
both formatters even if a caller passes them.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

EXTRA_PREFIX = "wp_"
REDACTED_KEYS: frozenset[str] = frozenset({"wp_weight", "wp_start_weight", "wp_code", "wp_entered_code"})
REDACTED = "[redacted]"


def context_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Collect wp_* extras from a record, masking private values."""
    fields: dict[str, Any] = {}
    for key, value in record.__dict__.items():
        if not key.startswith(EXTRA_PREFIX):
            continue
        fields[key] = REDACTED if key in REDACTED_KEYS else value
    return fields


class JSONFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
        }

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = "".join(traceback.format_exception(*record.exc_info))

        log_entry.update(context_fields(record))
        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Plain-text lines with wp_* context appended as key=value pairs."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = context_fields(record)
        if not fields:
            return line
        context = " ".join(f"{key[len(EXTRA_PREFIX):]}={value}" for key, value in sorted(fields.items()))
        return f"{line} [{context}]"


def setup_logging(log_format: str, level: int = logging.INFO) -> None:
    """Configure root logger with either JSON or plaintext format."""
    root = logging.getLogger()
    root.setLevel(level)

    # Remove existing handlers to avoid duplicate output
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if log_format == "json" else TextFormatter())
    root.addHandler(handler)
