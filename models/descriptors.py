"""Static table of sensor objects to query."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

SENSOR_ROOT = "/xyz/openbmc_project/sensors/"


@dataclass(frozen=True, slots=True)
class SensorDescriptor:
    """Bus service name and object path identifying one sensor."""

    service: str
    object_path: str


# Extend when new sensor objects need monitoring.
DEFAULT_SENSORS: Tuple[SensorDescriptor, ...] = (
    SensorDescriptor(
        service="xyz.openbmc_project.HwmonTempSensor",
        object_path="/xyz/openbmc_project/sensors/temperature/Temp",
    ),
)
