"""Query orchestration across the configured sensor objects."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Protocol, Sequence

from bus.reply import PropertyReply
from models.descriptors import DEFAULT_SENSORS, SENSOR_ROOT, SensorDescriptor
from models.records import SensorRecord
from services.decoder import decode
from services.errors import BusCallError, SensorQueryError, TypeMismatchError

logger = logging.getLogger(__name__)


class PropertySource(Protocol):
    def get_all(self, descriptor: SensorDescriptor) -> PropertyReply:
        ...


@dataclass
class QueryOutcome:
    """Result of querying one sensor: a record, or the error that stopped it."""

    descriptor: SensorDescriptor
    record: Optional[SensorRecord] = None
    error: Optional[SensorQueryError] = None

    @property
    def ok(self) -> bool:
        return self.record is not None


def sensor_matches_type(descriptor: SensorDescriptor, sensor_type: Optional[str]) -> bool:
    """Match the path component directly below ``SENSOR_ROOT`` against ``sensor_type``."""
    if not sensor_type:
        return True

    path = descriptor.object_path
    if not path.startswith(SENSOR_ROOT):
        return False

    component, sep, _ = path[len(SENSOR_ROOT):].partition("/")
    if not sep:
        return False
    return component == sensor_type


class SensorQueryService:
    """Queries sensors one at a time, isolating per-object failures."""

    def __init__(
        self,
        source: PropertySource,
        sensors: Sequence[SensorDescriptor] = DEFAULT_SENSORS,
    ) -> None:
        self.source = source
        self.sensors = tuple(sensors)

    def query(self, descriptor: SensorDescriptor) -> SensorRecord:
        reply = self.source.get_all(descriptor)
        return decode(reply, descriptor.object_path)

    def select(self, sensor_type: Optional[str] = None) -> Iterable[SensorDescriptor]:
        return [d for d in self.sensors if sensor_matches_type(d, sensor_type)]

    def run(self, sensor_type: Optional[str] = None) -> Iterator[QueryOutcome]:
        for descriptor in self.select(sensor_type):
            try:
                record = self.query(descriptor)
            except SensorQueryError as exc:
                self._log_failure(descriptor, exc)
                yield QueryOutcome(descriptor=descriptor, error=exc)
                continue
            yield QueryOutcome(descriptor=descriptor, record=record)

    @staticmethod
    def _log_failure(descriptor: SensorDescriptor, exc: SensorQueryError) -> None:
        extra = {
            "object_path": descriptor.object_path,
            "service": descriptor.service,
            "reason": type(exc).__name__,
        }
        if isinstance(exc, TypeMismatchError):
            extra["tag"] = exc.tag
            logger.error("Value type mismatch, backend and client disagree: %s", exc, extra=extra)
        elif isinstance(exc, BusCallError):
            logger.warning("Property call failed: %s", exc, extra=extra)
        else:
            logger.warning("Failed to decode sensor object: %s", exc, extra=extra)
