"""CLI interface for replaying scripted weight-progress sessions."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

import click

from .clock import ManualClock, SystemClock
from .config import Config
from .derivation import change_direction, format_change, format_weight
from .errors import Outcome
from .logging import setup_logging
from .session import SessionController, SessionView

logger = logging.getLogger(__name__)

TREND_LABELS = {"gain": "up", "loss_or_flat": "down/flat"}

ActionFn = Callable[[SessionController, dict[str, Any]], Any]

ACTIONS: dict[str, tuple[str, ActionFn]] = {
    "add_profile": ("Add a profile: {name}", lambda s, a: s.add_profile(a.get("name", ""))),
    "switch": ("Make a profile active: {id}", lambda s, a: s.switch_active(a.get("id"))),
    "start_weight": (
        "Commit start weight and private code: {weight, code}",
        lambda s, a: s.commit_start_weight(a.get("weight"), a.get("code", "")),
    ),
    "measure": ("Record a weigh-in for today: {weight}", lambda s, a: s.add_measurement(a.get("weight"))),
    "submit_code": ("Try to reveal raw weights: {code}", lambda s, a: s.submit_code(a.get("code", ""))),
    "hide": ("Hide raw weights again: {}", lambda s, a: s.hide()),
}


class ReplayError(Exception):
    pass


def replay(session: SessionController, actions: list[dict[str, Any]], clock: ManualClock | None = None) -> list[str]:
    """Apply scripted actions in order. Returns one note per rejected action."""
    notes: list[str] = []
    for index, action in enumerate(actions):
        if not isinstance(action, dict):
            raise ReplayError(f"action #{index} must be an object")
        kind = action.get("action")
        if kind not in ACTIONS:
            raise ReplayError(f"action #{index}: unknown action {kind!r}")
        if "date" in action:
            if clock is None:
                raise ReplayError(f"action #{index}: 'date' needs a manual clock")
            if not isinstance(action["date"], str):
                raise ReplayError(f"action #{index}: 'date' must be a YYYY-MM-DD string")
            clock.set(date.fromisoformat(action["date"]))

        _, fn = ACTIONS[kind]
        result = fn(session, action)
        if isinstance(result, Outcome) and not result.ok:
            notes.append(f"#{index} {kind}: {result.rejection.code} ({result.rejection.message})")
    logger.info("Replayed %d actions, %d rejected", len(actions), len(notes))
    return notes


def render_table(view: SessionView) -> str:
    if view.profile is None:
        return "No active profile."
    lines = [f"{view.profile.name} [{view.gate_state}]"]
    if view.profile.start_weight is not None:
        lines.append(f"Start weight: {view.profile.start_weight} kg")
    lines.append(f"{'Date':<12}{'Weight':>10}{'vs prev':>10}{'vs start':>10}  Trend")
    for record in view.records:
        lines.append(
            f"{record.date.isoformat():<12}"
            f"{format_weight(record):>10}"
            f"{format_change(record.change_from_prev):>10}"
            f"{format_change(record.change_from_start):>10}"
            f"  {TREND_LABELS[change_direction(record.change_from_start)]}"
        )
    if view.message:
        lines.append(view.message)
    return "\n".join(lines)


@click.group()
def main():
    """Weight progress tracker with a code-gated weight view."""


@main.command("replay")
@click.argument("script", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Write the final view to a JSON file.")
@click.option("--table", is_flag=True, help="Print the final view as a text table.")
def replay_command(script: Path, output: Path | None, table: bool):
    """Replay a JSON list of actions against a fresh session."""
    config = Config.from_env()
    setup_logging(config.log_format)

    # Pin the clock to the host day in the configured timezone; actions may move it.
    clock = ManualClock(SystemClock(config.timezone).today())
    session = SessionController.from_config(config, clock=clock)
    try:
        with script.open() as f:
            actions = json.load(f)
        if not isinstance(actions, list):
            raise ReplayError("script must contain a JSON list of actions")
        notes = replay(session, actions, clock)
    except (ReplayError, ValueError, TypeError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    for note in notes:
        click.echo(f"Rejected {note}", err=True)

    view = session.current_view()
    if output:
        with output.open("w") as f:
            json.dump(view.to_dict(), f, indent=2)
        click.echo(f"Wrote view of {len(view.records)} records to {output}")
    if table:
        click.echo(render_table(view))
    elif not output:
        click.echo(json.dumps(view.to_dict(), indent=2))


@main.command("actions")
def list_actions():
    """List the actions a replay script may use."""
    for name, (description, _) in ACTIONS.items():
        click.echo(f"{name}: {description}")
