from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, Protocol, Set

from catpoint.domain.models import AlarmStatus, ArmingStatus, Sensor, SystemState, copy_sensors


class SecurityRepository(Protocol):
    """
    Persistence contract for the security service.

    The repository is a dumb store: it holds sensors, the arming status and the
    alarm status, and never makes decisions. Every method is synchronous.
    Implementations raise :class:`~catpoint.core.errors.RepositoryFailure` when
    the underlying storage fails.

    Unknown sensors
    ---------------
    - ``update_sensor`` inserts a sensor it does not know yet.
    - ``remove_sensor`` ignores a sensor it does not know.
    - ``add_sensor`` keeps the stored sensor if the name already exists.
    """

    def get_arming_status(self) -> ArmingStatus:
        ...

    def set_arming_status(self, status: ArmingStatus) -> None:
        ...

    def get_alarm_status(self) -> AlarmStatus:
        ...

    def set_alarm_status(self, status: AlarmStatus) -> None:
        ...

    def get_sensors(self) -> Set[Sensor]:
        ...

    def add_sensor(self, sensor: Sensor) -> None:
        ...

    def remove_sensor(self, sensor: Sensor) -> None:
        ...

    def update_sensor(self, sensor: Sensor) -> None:
        ...


@dataclass
class InMemorySecurityRepository:
    """
    Thread-safe in-memory repository.

    Sensors are kept in an insertion-ordered mapping keyed by name, which
    enforces name uniqueness. The stored objects are the ones callers passed
    in, so ``get_sensors`` hands back live sensors that the service mutates and
    then writes back through ``update_sensor``.

    Concurrency Model
    -----------------
    All reads/writes are guarded by a single re-entrant lock. ``get_sensors``
    returns a new set so callers may iterate while other threads mutate the
    repository.

    Attributes
    ----------
    arming_status
        Current arming status.
    alarm_status
        Current alarm status.
    sensors
        Mapping of sensor name -> Sensor.
    """

    arming_status: ArmingStatus = ArmingStatus.DISARMED
    alarm_status: AlarmStatus = AlarmStatus.NO_ALARM
    sensors: Dict[str, Sensor] = field(default_factory=dict)

    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)

    # --- Arming / alarm API ---
    def get_arming_status(self) -> ArmingStatus:
        with self._lock:
            return self.arming_status

    def set_arming_status(self, status: ArmingStatus) -> None:
        with self._lock:
            self.arming_status = ArmingStatus(status)

    def get_alarm_status(self) -> AlarmStatus:
        with self._lock:
            return self.alarm_status

    def set_alarm_status(self, status: AlarmStatus) -> None:
        with self._lock:
            self.alarm_status = AlarmStatus(status)

    # --- Sensor API ---
    def get_sensors(self) -> Set[Sensor]:
        """
        Return the known sensors.

        Returns
        -------
        set of Sensor
            New set containing the stored sensor objects.
        """
        with self._lock:
            return set(self.sensors.values())

    def add_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self.sensors.setdefault(sensor.name, sensor)

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self.sensors.pop(sensor.name, None)

    def update_sensor(self, sensor: Sensor) -> None:
        """
        Store ``sensor`` under its name, replacing any previous entry.

        Parameters
        ----------
        sensor
            Sensor carrying the new ``active`` flag.
        """
        with self._lock:
            self.sensors[sensor.name] = sensor

    # --- Snapshot ---
    def snapshot(self) -> SystemState:
        """
        Consistent copy of the repository contents.

        Returns
        -------
        SystemState
            Frozen snapshot; later mutation of live sensors does not leak in.
        """
        with self._lock:
            return SystemState(
                arming_status=self.arming_status,
                alarm_status=self.alarm_status,
                sensors=copy_sensors(self.sensors.values()),
            )
