"""Text rendering of sensor records."""

from __future__ import annotations

from models.records import SensorRecord, ValueKind

# Longest thresholds rendering is "lc,uc,lw,uw".
THRESHOLDS_MAX_LENGTH = 11
VALUE_MAX_LENGTH = 11

UNKNOWN_VALUE = "(unknown)"
NO_ALARMS = "ok"


def format_value(record: SensorRecord) -> str:
    """Render the reading; values wider than ``VALUE_MAX_LENGTH`` are truncated."""
    if record.kind is ValueKind.double:
        text = f"{record.value:f}"
    elif record.kind is ValueKind.int64:
        text = str(record.value)
    else:
        text = UNKNOWN_VALUE
    return text[:VALUE_MAX_LENGTH]


def format_thresholds(record: SensorRecord) -> str:
    labels = [threshold.label for threshold in record.active_thresholds()]
    return ",".join(labels) if labels else NO_ALARMS


def format_line(object_path: str, record: SensorRecord) -> str:
    return f"{object_path}: {format_value(record)} {format_thresholds(record)}"
