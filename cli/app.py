from __future__ import annotations

import logging
from typing import Optional

import typer

from bus.client import BusClient
from cli.config import load_config
from cli.render import render_outcomes
from logging_config import configure_logging
from services.errors import BusConnectionError
from services.query import SensorQueryService

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Print the reading and threshold alarm state of the configured sensors.",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)


@app.command()
def main(
    sensor_type: Optional[str] = typer.Argument(
        None,
        help="Only query sensors of this type, e.g. 'temperature'. Empty matches all.",
    ),
    bus: Optional[str] = typer.Option(
        None,
        "--bus",
        "-b",
        help="SYSTEM, SESSION or a D-Bus address (defaults to SENSOR_QUERY_BUS env or SYSTEM).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each property call (defaults to SENSOR_QUERY_TIMEOUT env).",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit one JSON object per sensor instead of text lines.",
    ),
) -> None:
    """Query each configured sensor object and print one line per sensor."""
    configure_logging()
    config = load_config(bus=bus, timeout=timeout, json_output=json_output)

    try:
        client = BusClient.connect_default(bus=config.bus, timeout=config.timeout)
    except BusConnectionError as exc:
        typer.secho(f"can't connect to dbus: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    with client:
        service = SensorQueryService(client)
        failures = render_outcomes(service.run(sensor_type), json_output=config.json_output)

    if failures:
        logger.warning("%d sensor object(s) could not be read", failures)


def run() -> None:
    app()
