"""
Domain models and enums.

This module defines the core domain-level types used across the system:
- Arming status selected by the operator
- Alarm status decided by the security service
- Sensor types and the Sensor record itself
- SystemState, an immutable snapshot of everything the repository holds

Enums subclass ``str`` so values serialize directly to JSON/YAML and compare
naturally against plain strings coming from config files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, List


class ArmingStatus(str, Enum):
    """
    Operator-selected posture of the system.

    Members
    -------
    DISARMED : str
        The system is off; sensor activity does not raise alarms.
    ARMED_HOME : str
        Armed while people are at home. Cats on camera raise the alarm.
    ARMED_AWAY : str
        Armed while the premises are empty.
    """

    DISARMED = "DISARMED"
    ARMED_HOME = "ARMED_HOME"
    ARMED_AWAY = "ARMED_AWAY"

    @property
    def description(self) -> str:
        return _ARMING_DESCRIPTIONS[self]

    @property
    def is_armed(self) -> bool:
        return self is not ArmingStatus.DISARMED


class AlarmStatus(str, Enum):
    """
    Current threat level of the premises.

    Members
    -------
    NO_ALARM : str
        Everything is quiet.
    PENDING_ALARM : str
        One sensor tripped while armed; a second trip escalates to ALARM.
    ALARM : str
        The alarm is sounding. Only an arming change clears it.
    """

    NO_ALARM = "NO_ALARM"
    PENDING_ALARM = "PENDING_ALARM"
    ALARM = "ALARM"

    @property
    def description(self) -> str:
        return _ALARM_DESCRIPTIONS[self]

    @property
    def level(self) -> str:
        """UI level for the status indicator: OK / WARNING / CRITICAL."""
        return _ALARM_LEVELS[self]


class SensorType(str, Enum):
    """Kind of zone sensor."""

    DOOR = "DOOR"
    WINDOW = "WINDOW"
    MOTION = "MOTION"


_ARMING_DESCRIPTIONS = {
    ArmingStatus.DISARMED: "Disarmed",
    ArmingStatus.ARMED_HOME: "Arm - At Home",
    ArmingStatus.ARMED_AWAY: "Arm - Away",
}

_ALARM_DESCRIPTIONS = {
    AlarmStatus.NO_ALARM: "Cool and Good",
    AlarmStatus.PENDING_ALARM: "I'm in Danger...",
    AlarmStatus.ALARM: "Awooga!",
}

_ALARM_LEVELS = {
    AlarmStatus.NO_ALARM: "OK",
    AlarmStatus.PENDING_ALARM: "WARNING",
    AlarmStatus.ALARM: "CRITICAL",
}


@dataclass(order=True, unsafe_hash=True)
class Sensor:
    """
    A named door/window/motion detector with an active bit.

    Identity is the sensor ``name``: equality, hashing and ordering ignore
    ``sensor_type`` and ``active``. This lets a sensor be mutated in place
    (``active`` flips) while staying a valid member of sets and dict keys.

    Parameters
    ----------
    name
        Unique, non-empty sensor name.
    sensor_type
        Kind of sensor.
    active
        Whether the sensor is currently tripped.

    Raises
    ------
    ValueError
        If ``name`` is empty or blank.
    """

    name: str
    sensor_type: SensorType = field(compare=False)
    active: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Sensor name must be a non-empty string")
        self.sensor_type = SensorType(self.sensor_type)


@dataclass(frozen=True)
class SystemState:
    """
    Immutable snapshot of the repository contents.

    Parameters
    ----------
    arming_status
        Current arming status.
    alarm_status
        Current alarm status.
    sensors
        Copies of the known sensors, frozen at snapshot time.
    """

    arming_status: ArmingStatus = ArmingStatus.DISARMED
    alarm_status: AlarmStatus = AlarmStatus.NO_ALARM
    sensors: FrozenSet[Sensor] = frozenset()

    @property
    def any_sensor_active(self) -> bool:
        return any(s.active for s in self.sensors)

    def sorted_sensors(self) -> List[Sensor]:
        return sorted(self.sensors)


def copy_sensors(sensors: Iterable[Sensor]) -> FrozenSet[Sensor]:
    """Detached copies of ``sensors`` so later mutation does not leak into a snapshot."""
    return frozenset(Sensor(name=s.name, sensor_type=s.sensor_type, active=s.active) for s in sensors)
