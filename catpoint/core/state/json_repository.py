from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Set

from catpoint.core.errors import RepositoryFailure
from catpoint.core.state.security_repository import InMemorySecurityRepository
from catpoint.domain.models import AlarmStatus, ArmingStatus, Sensor, SensorType, SystemState

logger = logging.getLogger(__name__)

ARMING_STATUS_KEY = "arming_status"
ALARM_STATUS_KEY = "alarm_status"
SENSORS_KEY = "sensors"


def _encode_sensor(sensor: Sensor) -> Dict[str, Any]:
    return {"name": sensor.name, "sensor_type": sensor.sensor_type.value, "active": sensor.active}


def _decode_sensor(obj: Dict[str, Any]) -> Sensor:
    """
    Decode one sensor entry.

    Raises
    ------
    KeyError
        If ``name`` or ``sensor_type`` is missing.
    ValueError
        If the sensor type is unknown or the name is empty.
    """
    return Sensor(
        name=str(obj["name"]),
        sensor_type=SensorType(obj["sensor_type"]),
        active=bool(obj.get("active", False)),
    )


def encode_state(state: SystemState) -> Dict[str, Any]:
    """
    Convert a snapshot into the JSON document layout.

    Sensors are written sorted by name so the file diffs cleanly.
    """
    return {
        ARMING_STATUS_KEY: state.arming_status.value,
        ALARM_STATUS_KEY: state.alarm_status.value,
        SENSORS_KEY: [_encode_sensor(s) for s in state.sorted_sensors()],
    }


def decode_state(obj: Dict[str, Any]) -> SystemState:
    """
    Convert a JSON document into a snapshot.

    Missing keys fall back to the defaults of a fresh install
    (DISARMED, NO_ALARM, no sensors).

    Raises
    ------
    RepositoryFailure
        If the document is not a mapping or contains invalid values.
    """
    if not isinstance(obj, dict):
        raise RepositoryFailure("State document must be a JSON object")
    try:
        sensors: List[Sensor] = [_decode_sensor(item) for item in obj.get(SENSORS_KEY, [])]
        return SystemState(
            arming_status=ArmingStatus(obj.get(ARMING_STATUS_KEY, ArmingStatus.DISARMED.value)),
            alarm_status=AlarmStatus(obj.get(ALARM_STATUS_KEY, AlarmStatus.NO_ALARM.value)),
            sensors=frozenset(sensors),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise RepositoryFailure(f"Invalid state document: {e!r}") from e


@dataclass
class JsonFileSecurityRepository:
    """
    Repository persisted as a single JSON document on disk.

    The document is a small key-value store with three keys: ``arming_status``,
    ``alarm_status`` and ``sensors``. The file is read once at construction;
    afterwards the in-memory copy is authoritative for reads and every write
    rewrites the whole document.

    Failure Model
    -------------
    A write is applied to a candidate copy first and only becomes visible once
    the file has been replaced, so a failed write leaves both the file and the
    in-memory state untouched and raises :class:`RepositoryFailure`.

    Parameters
    ----------
    path
        Location of the JSON document. Parent directories are created on the
        first write.
    """

    path: Path
    _state: InMemorySecurityRepository = field(init=False, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path).expanduser()
        self._state = self._load()

    # --- file IO ---
    def _load(self) -> InMemorySecurityRepository:
        if not self.path.exists():
            logger.info("No state file at %s, starting from defaults", self.path)
            return InMemorySecurityRepository()

        try:
            with self.path.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise RepositoryFailure(f"Cannot read state file {self.path}: {e!r}") from e

        state = decode_state(raw)
        repo = InMemorySecurityRepository(
            arming_status=state.arming_status,
            alarm_status=state.alarm_status,
        )
        for sensor in state.sorted_sensors():
            repo.add_sensor(sensor)
        logger.info("Loaded state from %s (%d sensors)", self.path, len(state.sensors))
        return repo

    def _write(self, state: SystemState) -> None:
        doc = encode_state(state)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".catpoint-", suffix=".json", dir=self.path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(doc, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise RepositoryFailure(f"Cannot write state file {self.path}: {e!r}") from e

    def _commit(self, candidate: InMemorySecurityRepository) -> None:
        self._write(candidate.snapshot())
        self._state = candidate

    def _candidate(self) -> InMemorySecurityRepository:
        current = self._state
        return InMemorySecurityRepository(
            arming_status=current.arming_status,
            alarm_status=current.alarm_status,
            sensors=dict(current.sensors),
        )

    # --- SecurityRepository API ---
    def get_arming_status(self) -> ArmingStatus:
        with self._lock:
            return self._state.get_arming_status()

    def set_arming_status(self, status: ArmingStatus) -> None:
        with self._lock:
            candidate = self._candidate()
            candidate.set_arming_status(status)
            self._commit(candidate)

    def get_alarm_status(self) -> AlarmStatus:
        with self._lock:
            return self._state.get_alarm_status()

    def set_alarm_status(self, status: AlarmStatus) -> None:
        with self._lock:
            candidate = self._candidate()
            candidate.set_alarm_status(status)
            self._commit(candidate)

    def get_sensors(self) -> Set[Sensor]:
        with self._lock:
            return self._state.get_sensors()

    def add_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            candidate = self._candidate()
            candidate.add_sensor(sensor)
            self._commit(candidate)

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            candidate = self._candidate()
            candidate.remove_sensor(sensor)
            self._commit(candidate)

    def update_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            candidate = self._candidate()
            candidate.update_sensor(sensor)
            self._commit(candidate)

    def snapshot(self) -> SystemState:
        with self._lock:
            return self._state.snapshot()
