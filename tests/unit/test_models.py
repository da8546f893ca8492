"""
Unit tests for catpoint.domain.models.

These tests verify:
- Enum stability (required members exist and preserve expected values)
- Sensor identity semantics (name-only equality, hashing and ordering)
- SystemState immutability and snapshot helpers

The goal is to validate domain contracts used across the rules, service, and UI.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from catpoint.domain.models import (
    AlarmStatus,
    ArmingStatus,
    Sensor,
    SensorType,
    SystemState,
    copy_sensors,
)


def test_arming_status_enum_values() -> None:
    """
    Ensure ArmingStatus members and values are stable.

    These values are persisted by the JSON repository and should not change
    silently without intent.
    """
    assert ArmingStatus.DISARMED.value == "DISARMED"
    assert ArmingStatus.ARMED_HOME.value == "ARMED_HOME"
    assert ArmingStatus.ARMED_AWAY.value == "ARMED_AWAY"
    assert [s.is_armed for s in ArmingStatus] == [False, True, True]


def test_alarm_status_enum_values_and_levels() -> None:
    assert AlarmStatus.NO_ALARM.value == "NO_ALARM"
    assert AlarmStatus.PENDING_ALARM.value == "PENDING_ALARM"
    assert AlarmStatus.ALARM.value == "ALARM"

    assert AlarmStatus.NO_ALARM.level == "OK"
    assert AlarmStatus.PENDING_ALARM.level == "WARNING"
    assert AlarmStatus.ALARM.level == "CRITICAL"


def test_every_status_has_a_description() -> None:
    for status in list(ArmingStatus) + list(AlarmStatus):
        assert status.description


def test_sensor_type_enum_values() -> None:
    assert {t.value for t in SensorType} == {"DOOR", "WINDOW", "MOTION"}


def test_sensor_defaults_to_inactive() -> None:
    s = Sensor(name="Front door", sensor_type=SensorType.DOOR)
    assert s.active is False


def test_sensor_accepts_type_value_string() -> None:
    s = Sensor(name="Hall", sensor_type="MOTION")  # type: ignore[arg-type]
    assert s.sensor_type is SensorType.MOTION


@pytest.mark.parametrize("name", ["", "   "])
def test_sensor_rejects_empty_name(name: str) -> None:
    with pytest.raises(ValueError):
        Sensor(name=name, sensor_type=SensorType.DOOR)


def test_sensor_identity_is_name_only() -> None:
    """
    Two sensors with the same name are the same sensor, whatever their type
    or activation flag. Mutating ``active`` must not change the hash.
    """
    a = Sensor(name="D1", sensor_type=SensorType.DOOR, active=False)
    b = Sensor(name="D1", sensor_type=SensorType.WINDOW, active=True)

    assert a == b
    assert hash(a) == hash(b)

    bucket = {a}
    a.active = True
    assert a in bucket
    assert len({a, b}) == 1


def test_sensors_sort_by_name() -> None:
    sensors = [
        Sensor(name="Window", sensor_type=SensorType.WINDOW),
        Sensor(name="Door", sensor_type=SensorType.DOOR),
        Sensor(name="Motion", sensor_type=SensorType.MOTION),
    ]
    assert [s.name for s in sorted(sensors)] == ["Door", "Motion", "Window"]


def test_system_state_defaults_and_frozen() -> None:
    st = SystemState()
    assert st.arming_status is ArmingStatus.DISARMED
    assert st.alarm_status is AlarmStatus.NO_ALARM
    assert st.sensors == frozenset()
    assert st.any_sensor_active is False

    with pytest.raises(FrozenInstanceError):
        st.alarm_status = AlarmStatus.ALARM  # type: ignore[misc]


def test_copy_sensors_detaches_from_live_objects() -> None:
    live = Sensor(name="D1", sensor_type=SensorType.DOOR, active=True)
    st = SystemState(sensors=copy_sensors([live]))

    live.active = False

    assert st.any_sensor_active is True
    assert st.sorted_sensors()[0].active is True
