from __future__ import annotations

from typing import Iterable

import typer

from cli.schemas import SensorReport
from services.formatter import format_line
from services.query import QueryOutcome


def _one_line(text: str) -> str:
    return " ".join(text.split())


def render_outcome(outcome: QueryOutcome) -> None:
    object_path = outcome.descriptor.object_path
    if outcome.record is not None:
        typer.echo(format_line(object_path, outcome.record))
        return
    reason = _one_line(str(outcome.error))
    typer.echo(f"{object_path}: failed to read sensor object ({reason})")


def render_json(outcome: QueryOutcome) -> None:
    typer.echo(SensorReport.from_outcome(outcome).model_dump_json())


def render_outcomes(outcomes: Iterable[QueryOutcome], json_output: bool = False) -> int:
    """Print every outcome as it arrives; return how many sensors failed."""
    render = render_json if json_output else render_outcome
    failures = 0
    for outcome in outcomes:
        render(outcome)
        if not outcome.ok:
            failures += 1
    return failures
