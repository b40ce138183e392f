"""Pydantic schemas for machine-readable output."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from models.records import ValueKind
from services.query import QueryOutcome


class ReportStatus(str, Enum):
    ok = "ok"
    alarm = "alarm"
    failed = "failed"


class SensorReport(BaseModel):
    """One sensor object's reading, or the reason it could not be read."""

    object_path: str
    service: str
    status: ReportStatus
    value: Optional[Union[int, float]] = None
    value_type: Optional[str] = Field(
        default=None, description="Bus type of the reading: 'double' or 'int64'."
    )
    thresholds: List[str] = Field(
        default_factory=list, description="Labels of active threshold alarms."
    )
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: QueryOutcome) -> "SensorReport":
        descriptor = outcome.descriptor
        record = outcome.record
        if record is None:
            return cls(
                object_path=descriptor.object_path,
                service=descriptor.service,
                status=ReportStatus.failed,
                error=str(outcome.error) if outcome.error else None,
                error_type=type(outcome.error).__name__ if outcome.error else None,
            )
        labels = [threshold.label for threshold in record.active_thresholds()]
        kind: Optional[ValueKind] = record.kind
        return cls(
            object_path=descriptor.object_path,
            service=descriptor.service,
            status=ReportStatus.alarm if labels else ReportStatus.ok,
            value=record.value,
            value_type=kind.name if kind else None,
            thresholds=labels,
        )
