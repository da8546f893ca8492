"""
Stress tests for SecurityService concurrency.

These tests call the service from several threads at once. They validate
safety properties such as:
- no exceptions during concurrent arming / sensor / image calls
- listeners may register and unregister while notifications are in flight
- the service stays consistent after the storm (disarm -> NO_ALARM, arm -> all
  sensors inactive)

Notes
-----
Threading tests are probabilistic: they increase confidence but do not prove
the absence of races. Run multiple times for higher confidence.
"""

from __future__ import annotations

import threading
from typing import List

import pytest

from catpoint.core.state.security_repository import InMemorySecurityRepository
from catpoint.domain.models import AlarmStatus, ArmingStatus, Sensor, SensorType
from catpoint.image.image_service import FakeImageService
from catpoint.services.security_service import SecurityService


class CountingListener:
    """Thread-safe listener counting callbacks."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.notifies = 0
        self.cats = 0
        self.sensor_changes = 0

    def notify(self, status: AlarmStatus) -> None:
        with self._lock:
            self.notifies += 1

    def cat_detected(self, cat: bool) -> None:
        with self._lock:
            self.cats += 1

    def sensor_status_changed(self) -> None:
        with self._lock:
            self.sensor_changes += 1


@pytest.mark.stress
def test_concurrent_entry_points_no_exceptions() -> None:
    service = SecurityService(repository=InMemorySecurityRepository(), image_service=FakeImageService(seed=1))
    counter = CountingListener()
    service.add_status_listener(counter)

    sensors = [Sensor(name=f"S{i}", sensor_type=list(SensorType)[i % 3]) for i in range(8)]
    for s in sensors:
        service.add_sensor(s)

    start = threading.Barrier(6)
    errors: List[BaseException] = []
    iterations = 300

    def guard(fn):
        def run() -> None:
            try:
                start.wait()
                fn()
            except BaseException as e:  # pragma: no cover - only on failure
                errors.append(e)
        return run

    def toggler(offset: int):
        def body() -> None:
            for i in range(iterations):
                s = sensors[(i + offset) % len(sensors)]
                service.change_sensor_activation_status(s, not s.active)
        return body

    def armer() -> None:
        modes = list(ArmingStatus)
        for i in range(iterations // 3):
            service.set_arming_status(modes[i % len(modes)])

    def camera() -> None:
        for _ in range(iterations):
            service.process_image(object())

    def churner() -> None:
        for _ in range(iterations):
            extra = CountingListener()
            service.add_status_listener(extra)
            service.remove_status_listener(extra)

    threads = [
        threading.Thread(target=guard(toggler(0))),
        threading.Thread(target=guard(toggler(3))),
        threading.Thread(target=guard(armer)),
        threading.Thread(target=guard(camera)),
        threading.Thread(target=guard(churner)),
        threading.Thread(target=guard(lambda: [service.get_sensors() for _ in range(iterations)])),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30.0)

    assert not errors
    assert all(not t.is_alive() for t in threads)
    assert counter.cats == iterations
    assert counter.sensor_changes >= 2 * iterations

    service.set_arming_status(ArmingStatus.ARMED_AWAY)
    assert all(not s.active for s in service.get_sensors())

    service.set_arming_status(ArmingStatus.DISARMED)
    assert service.get_alarm_status() is AlarmStatus.NO_ALARM
