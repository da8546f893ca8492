from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, List, Set

from catpoint.core.alarm.alarm_base import AlarmContext, SensorTransition
from catpoint.core.alarm.alarm_rules import (
    arming_changed,
    image_classified,
    resets_sensors,
    rule_for_sensor_transition,
)
from catpoint.core.config.yaml_config import DEFAULT_CAT_CONFIDENCE_THRESHOLD
from catpoint.core.errors import ClassifierFailure
from catpoint.core.state.security_repository import SecurityRepository
from catpoint.domain.models import AlarmStatus, ArmingStatus, Sensor
from catpoint.image.image_service import ImageService
from catpoint.listeners.base import StatusListener

logger = logging.getLogger(__name__)


@dataclass
class SecurityService:
    """
    Receive changes to the security system and decide the alarm status.

    Responsibilities
    ----------------
    - Forward sensor and arming updates to the repository.
    - Build an :class:`AlarmContext` from fresh repository reads and ask the
      alarm rules for the next status.
    - Keep the "cat on camera" latch from the latest processed image.
    - Notify registered status listeners.

    Notes
    -----
    This service contains orchestration logic only. Transition rules live in
    ``catpoint.core.alarm.alarm_rules``. Every public entry point runs under
    one re-entrant lock, so calls from several threads are serialized and each
    transition is atomic with respect to the others.

    Parameters
    ----------
    repository
        Store for sensors, arming status and alarm status.
    image_service
        Classifier used by :meth:`process_image`.
    cat_confidence_threshold
        Confidence (percent) passed to the classifier.
    """

    repository: SecurityRepository
    image_service: ImageService
    cat_confidence_threshold: float = DEFAULT_CAT_CONFIDENCE_THRESHOLD

    _listeners: List[StatusListener] = field(default_factory=list, init=False, repr=False)
    _cat_on_cam: bool = field(default=False, init=False, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)

    # --- Listener registry ---
    def add_status_listener(self, listener: StatusListener) -> None:
        """Register ``listener``. Registering the same object twice has no effect."""
        with self._lock:
            if not any(existing is listener for existing in self._listeners):
                self._listeners.append(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        with self._lock:
            self._listeners = [existing for existing in self._listeners if existing is not listener]

    def _broadcast(self, callback: str, *args: Any) -> None:
        # Snapshot so listeners may (un)register from inside a callback.
        for listener in list(self._listeners):
            try:
                getattr(listener, callback)(*args)
            except Exception:
                logger.exception("Status listener %r failed in %s", listener, callback)

    # --- Alarm status ---
    def set_alarm_status(self, status: AlarmStatus) -> None:
        """
        Change the alarm status of the system and notify all listeners.

        Parameters
        ----------
        status
            New alarm status. Listeners are notified even if it equals the
            current status.

        Raises
        ------
        RepositoryFailure
            If the write fails; listeners are not notified in that case.
        """
        status = AlarmStatus(status)
        with self._lock:
            self.repository.set_alarm_status(status)
            logger.info("Alarm status set to %s", status.value)
            self._broadcast("notify", status)

    def _context(self) -> AlarmContext:
        return AlarmContext(
            arming_status=self.repository.get_arming_status(),
            alarm_status=self.repository.get_alarm_status(),
            any_sensor_active=any(s.active for s in self.repository.get_sensors()),
            cat_on_cam=self._cat_on_cam,
        )

    # --- Arming status ---
    def set_arming_status(self, status: ArmingStatus) -> None:
        """
        Set the arming status, updating the alarm status and sensors as needed.

        Order of effects
        ----------------
        1. Disarming writes NO_ALARM; arming at home with a cat on camera
           writes ALARM.
        2. Both armed modes sweep every sensor to inactive through
           :meth:`change_sensor_activation_status`, so listeners see one
           sensor change per sensor and a pending alarm can collapse.
        3. The new arming status is persisted.

        Parameters
        ----------
        status
            Arming status selected by the operator.
        """
        status = ArmingStatus(status)
        with self._lock:
            logger.info("Arming status change requested: %s", status.value)

            new_alarm = arming_changed(status, self._context())
            if new_alarm is not None:
                self.set_alarm_status(new_alarm)

            if resets_sensors(status):
                for sensor in sorted(self.repository.get_sensors()):
                    self.change_sensor_activation_status(sensor, False)

            self.repository.set_arming_status(status)

    # --- Sensors ---
    def change_sensor_activation_status(self, sensor: Sensor, active: bool) -> None:
        """
        Change the activation status of ``sensor`` and update the alarm status if necessary.

        The sensor is always written back and listeners always receive
        ``sensor_status_changed``. Alarm rules only run when the flag actually
        flips; redundant writes leave the alarm status alone.

        Parameters
        ----------
        sensor
            Sensor to update. Its ``active`` flag is mutated in place.
        active
            New activation status.

        Raises
        ------
        RepositoryFailure
            If the sensor write fails. ``sensor.active`` is restored first.
        """
        active = bool(active)
        with self._lock:
            was_active = sensor.active
            sensor.active = active
            try:
                self.repository.update_sensor(sensor)
            except Exception:
                sensor.active = was_active
                raise

            self._broadcast("sensor_status_changed")

            transition = SensorTransition.of(was_active, active)
            if transition is SensorTransition.UNCHANGED:
                logger.debug("Sensor %s already %s", sensor.name, "active" if active else "inactive")
                return

            logger.info("Sensor %s %s", sensor.name, transition.value.lower())
            new_alarm = rule_for_sensor_transition(transition)(self._context())
            if new_alarm is not None:
                self.set_alarm_status(new_alarm)

    # --- Camera ---
    def process_image(self, image: Any) -> bool:
        """
        Classify a camera image and update the alarm status accordingly.

        Parameters
        ----------
        image
            Opaque raster handed to the image service.

        Returns
        -------
        bool
            Whether the image contains a cat.

        Raises
        ------
        ClassifierFailure
            If the image service fails. Nothing changes and no listener is
            notified.
        RepositoryFailure
            If the alarm write fails. The cat latch keeps its previous value.
        """
        with self._lock:
            try:
                cat = bool(self.image_service.image_contains_cat(image, self.cat_confidence_threshold))
            except ClassifierFailure:
                raise
            except Exception as e:
                raise ClassifierFailure(f"Image service failed: {e!r}") from e

            new_alarm = image_classified(cat, self._context())
            if new_alarm is not None:
                self.set_alarm_status(new_alarm)

            self._broadcast("cat_detected", cat)
            self._cat_on_cam = cat
            return cat

    # --- Pass-through API ---
    def get_alarm_status(self) -> AlarmStatus:
        return self.repository.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        return self.repository.get_arming_status()

    def get_sensors(self) -> Set[Sensor]:
        return self.repository.get_sensors()

    def add_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self.repository.add_sensor(sensor)
            logger.info("Sensor added: %s (%s)", sensor.name, sensor.sensor_type.value)

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self.repository.remove_sensor(sensor)
            logger.info("Sensor removed: %s", sensor.name)
