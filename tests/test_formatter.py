from __future__ import annotations

import itertools

import pytest

from models.records import SensorRecord, Threshold, ValueKind
from services.formatter import (
    THRESHOLDS_MAX_LENGTH,
    VALUE_MAX_LENGTH,
    format_line,
    format_thresholds,
    format_value,
)


def _record(kind: ValueKind, value) -> SensorRecord:
    record = SensorRecord()
    record.set_value(kind, value)
    return record


def test_double_and_int64_render_differently() -> None:
    as_double = format_value(_record(ValueKind.double, 23.5))
    as_int = format_value(_record(ValueKind.int64, 23))

    assert as_double == "23.500000"
    assert as_int == "23"
    assert as_double != as_int


def test_negative_values() -> None:
    assert format_value(_record(ValueKind.double, -0.25)) == "-0.250000"
    assert format_value(_record(ValueKind.int64, -7)) == "-7"


def test_incomplete_record_renders_unknown() -> None:
    assert format_value(SensorRecord()) == "(unknown)"


@pytest.mark.parametrize(
    "kind, value",
    [
        (ValueKind.double, 1e20),
        (ValueKind.double, -123456789.123),
        (ValueKind.int64, 2**63 - 1),
        (ValueKind.int64, -(2**63)),
    ],
)
def test_value_rendering_is_bounded(kind, value) -> None:
    text = format_value(_record(kind, value))

    assert len(text) <= VALUE_MAX_LENGTH


def test_wide_value_is_truncated() -> None:
    assert format_value(_record(ValueKind.int64, 123456789012345)) == "12345678901"


def test_no_alarms_is_ok() -> None:
    assert format_thresholds(_record(ValueKind.double, 1.0)) == "ok"


def test_thresholds_follow_canonical_order() -> None:
    record = _record(ValueKind.double, 1.0)
    record.upper_warning = True
    record.lower_critical = True

    assert format_thresholds(record) == "lc,uw"


def test_all_thresholds() -> None:
    record = _record(ValueKind.double, 1.0)
    for threshold in Threshold:
        record.set_threshold(threshold, True)

    assert format_thresholds(record) == "lc,uc,lw,uw"


def test_threshold_rendering_is_bounded_for_every_combination() -> None:
    for states in itertools.product([False, True], repeat=len(Threshold)):
        record = _record(ValueKind.double, 1.0)
        for threshold, state in zip(Threshold, states):
            record.set_threshold(threshold, state)

        text = format_thresholds(record)

        assert text
        assert len(text) <= THRESHOLDS_MAX_LENGTH
        assert not text.endswith(",")


def test_format_line() -> None:
    record = _record(ValueKind.double, 42.0)
    record.upper_critical = True

    line = format_line("/xyz/openbmc_project/sensors/temperature/Temp", record)

    assert line == "/xyz/openbmc_project/sensors/temperature/Temp: 42.000000 uc"
