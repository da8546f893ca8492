"""
Widget tests for the PySide6 UI.

Validates:
- QtStatusBridge re-emits service notifications as signals
- MainWindow panels follow service state (status text, sensor table, arming buttons)

Runs on the Qt "offscreen" platform; skipped when PySide6 is not installed.
"""

from __future__ import annotations

import os
from typing import Any, List

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from catpoint.core.state.security_repository import InMemorySecurityRepository  # noqa: E402
from catpoint.domain.models import AlarmStatus, ArmingStatus, Sensor, SensorType  # noqa: E402
from catpoint.image.image_service import StaticImageService  # noqa: E402
from catpoint.services.security_service import SecurityService  # noqa: E402
from catpoint.ui.adapters.qt_bridge import QtStatusBridge  # noqa: E402
from catpoint.ui.main_window import MainWindow  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def service() -> SecurityService:
    return SecurityService(repository=InMemorySecurityRepository(), image_service=StaticImageService(result=True))


def test_bridge_emits_signals(qapp) -> None:
    bridge = QtStatusBridge()
    got: List[Any] = []
    bridge.alarm_status_changed.connect(lambda s: got.append(("alarm", s)))
    bridge.cat_detected_changed.connect(lambda c: got.append(("cat", c)))
    bridge.sensors_changed.connect(lambda: got.append(("sensors", None)))

    bridge.notify(AlarmStatus.ALARM)
    bridge.cat_detected(True)
    bridge.sensor_status_changed()

    assert got == [("alarm", AlarmStatus.ALARM), ("cat", True), ("sensors", None)]


def test_main_window_tracks_service(qapp, service: SecurityService) -> None:
    d1 = Sensor(name="D1", sensor_type=SensorType.DOOR)
    service.add_sensor(d1)
    win = MainWindow(service=service)

    assert win.status.text() == AlarmStatus.NO_ALARM.description
    assert win.sensor_panel.table.rowCount() == 1
    assert win.control_panel.buttons[ArmingStatus.DISARMED].isChecked()

    win.control_panel.buttons[ArmingStatus.ARMED_AWAY].click()
    assert service.get_arming_status() is ArmingStatus.ARMED_AWAY
    assert win.control_panel.buttons[ArmingStatus.ARMED_AWAY].isChecked()

    service.change_sensor_activation_status(d1, True)
    assert win.status.text() == AlarmStatus.PENDING_ALARM.description
    assert win.sensor_panel.table.item(0, 2).text() == "Active"

    win.close()


def test_image_panel_scan_reports_cat(qapp, service: SecurityService) -> None:
    from PySide6.QtGui import QImage

    service.set_arming_status(ArmingStatus.ARMED_HOME)
    win = MainWindow(service=service)

    img = QImage(8, 8, QImage.Format.Format_RGB32)
    win.image_panel.set_image(img)
    win.image_panel.scan()

    assert service.get_alarm_status() is AlarmStatus.ALARM
    assert "CAT DETECTED" in win.image_panel.header.text()
    assert win.status.text() == AlarmStatus.ALARM.description

    win.close()
