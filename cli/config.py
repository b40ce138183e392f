from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from settings import get_settings

DEFAULT_BUS = "SYSTEM"


@dataclass(frozen=True)
class CLIConfig:
    bus: str = DEFAULT_BUS
    timeout: Optional[float] = None
    json_output: bool = False


def _normalize_bus(value: str) -> str:
    candidate = value.strip()
    if candidate.upper() in {"SYSTEM", "SESSION"}:
        return candidate.upper()
    return candidate or DEFAULT_BUS


def load_config(
    bus: Optional[str] = None,
    timeout: Optional[float] = None,
    json_output: bool = False,
) -> CLIConfig:
    settings = get_settings()
    if timeout is None or timeout <= 0:
        timeout = settings.call_timeout
    return CLIConfig(
        bus=_normalize_bus(bus or settings.bus),
        timeout=timeout,
        json_output=json_output,
    )
