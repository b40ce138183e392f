"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union


class ValueKind(str, Enum):
    """Which numeric representation the bus reported for ``Value``."""

    double = "d"
    int64 = "x"

    @property
    def tag(self) -> str:
        return self.value


class Threshold(Enum):
    """Threshold alarm flags, declared in canonical reporting order."""

    LOWER_CRITICAL = ("CriticalAlarmLow", "lc", "lower_critical")
    UPPER_CRITICAL = ("CriticalAlarmHigh", "uc", "upper_critical")
    LOWER_WARNING = ("WarningAlarmLow", "lw", "lower_warning")
    UPPER_WARNING = ("WarningAlarmHigh", "uw", "upper_warning")

    def __init__(self, property_name: str, label: str, field_name: str) -> None:
        self.property_name = property_name
        self.label = label
        self.field_name = field_name


@dataclass(slots=True)
class SensorRecord:
    """Decoded reading and alarm state of one sensor object."""

    value: Union[float, int, None] = None
    kind: Optional[ValueKind] = None
    lower_critical: bool = False
    upper_critical: bool = False
    lower_warning: bool = False
    upper_warning: bool = False

    @property
    def is_complete(self) -> bool:
        return self.kind is not None

    def set_value(self, kind: ValueKind, value: Union[float, int]) -> None:
        self.kind = kind
        self.value = value

    def get_threshold(self, threshold: Threshold) -> bool:
        return getattr(self, threshold.field_name)

    def set_threshold(self, threshold: Threshold, state: bool) -> None:
        setattr(self, threshold.field_name, state)

    def active_thresholds(self) -> List[Threshold]:
        return [threshold for threshold in Threshold if self.get_threshold(threshold)]
