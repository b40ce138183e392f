from __future__ import annotations

import logging
from typing import Dict, List

import pytest

from bus.reply import PropertyReply
from models.descriptors import DEFAULT_SENSORS, SensorDescriptor
from services.errors import BusCallError, MissingValueError, TypeMismatchError
from services.query import SensorQueryService, sensor_matches_type

TEMP = SensorDescriptor("xyz.openbmc_project.HwmonTempSensor", "/xyz/openbmc_project/sensors/temperature/Temp")
FAN = SensorDescriptor("xyz.openbmc_project.FanSensor", "/xyz/openbmc_project/sensors/fan_tach/Fan0")
VOLT = SensorDescriptor("xyz.openbmc_project.ADCSensor", "/xyz/openbmc_project/sensors/voltage/P12V")


class FakeSource:
    def __init__(self, properties: Dict[str, object]) -> None:
        self.properties = properties
        self.calls: List[SensorDescriptor] = []
        self.replies: List[PropertyReply] = []

    def get_all(self, descriptor: SensorDescriptor) -> PropertyReply:
        self.calls.append(descriptor)
        props = self.properties[descriptor.object_path]
        if isinstance(props, Exception):
            raise props
        reply = PropertyReply.from_properties(descriptor.object_path, props)
        self.replies.append(reply)
        return reply


@pytest.mark.parametrize(
    "path, sensor_type, expected",
    [
        ("/xyz/openbmc_project/sensors/temperature/Temp", None, True),
        ("/xyz/openbmc_project/sensors/temperature/Temp", "", True),
        ("/xyz/openbmc_project/sensors/temperature/Temp", "temperature", True),
        ("/xyz/openbmc_project/sensors/temperature/Temp", "temp", False),
        ("/xyz/openbmc_project/sensors/temperature/Temp", "temperatures", False),
        ("/xyz/openbmc_project/sensors/temperature", "temperature", False),
        ("/xyz/openbmc_project/other/temperature/Temp", "temperature", False),
        ("/somewhere/else", None, True),
    ],
)
def test_sensor_matches_type(path, sensor_type, expected) -> None:
    descriptor = SensorDescriptor("svc", path)

    assert sensor_matches_type(descriptor, sensor_type) is expected


def test_default_table_contains_temperature_sensor() -> None:
    assert TEMP in DEFAULT_SENSORS


def test_run_yields_records_in_table_order() -> None:
    source = FakeSource(
        {
            TEMP.object_path: {"Value": ("d", 42.0), "CriticalAlarmHigh": ("b", True)},
            FAN.object_path: {"Value": ("x", 3000)},
        }
    )
    service = SensorQueryService(source, sensors=[TEMP, FAN])

    outcomes = list(service.run())

    assert [o.descriptor for o in outcomes] == [TEMP, FAN]
    assert all(o.ok for o in outcomes)
    assert outcomes[0].record.upper_critical is True
    assert outcomes[1].record.value == 3000
    assert all(reply.release_count == 1 for reply in source.replies)


def test_run_filters_by_type() -> None:
    source = FakeSource({FAN.object_path: {"Value": ("x", 3000)}})
    service = SensorQueryService(source, sensors=[TEMP, FAN, VOLT])

    outcomes = list(service.run("fan_tach"))

    assert source.calls == [FAN]
    assert len(outcomes) == 1


def test_failures_do_not_stop_remaining_sensors(caplog) -> None:
    source = FakeSource(
        {
            TEMP.object_path: {"CriticalAlarmHigh": ("b", False)},
            FAN.object_path: BusCallError("GetAll failed: org.freedesktop.DBus.Error.ServiceUnknown", object_path=FAN.object_path),
            VOLT.object_path: {"Value": ("d", 12.1)},
        }
    )
    service = SensorQueryService(source, sensors=[TEMP, FAN, VOLT])

    with caplog.at_level(logging.WARNING):
        outcomes = list(service.run())

    assert source.calls == [TEMP, FAN, VOLT]
    assert isinstance(outcomes[0].error, MissingValueError)
    assert isinstance(outcomes[1].error, BusCallError)
    assert outcomes[2].ok
    logged_paths = {getattr(r, "object_path", None) for r in caplog.records}
    assert {TEMP.object_path, FAN.object_path} <= logged_paths


def test_type_mismatch_logged_as_error(caplog) -> None:
    source = FakeSource({TEMP.object_path: {"Value": ("s", "42")}})
    service = SensorQueryService(source, sensors=[TEMP])

    with caplog.at_level(logging.WARNING):
        (outcome,) = list(service.run())

    assert isinstance(outcome.error, TypeMismatchError)
    assert outcome.record is None
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert errors[0].tag == "s"


def test_query_returns_record() -> None:
    source = FakeSource({TEMP.object_path: {"Value": ("d", 20.0)}})
    service = SensorQueryService(source, sensors=[TEMP])

    record = service.query(TEMP)

    assert record.value == 20.0
