from __future__ import annotations

from PySide6.QtWidgets import QHBoxLayout, QMainWindow, QVBoxLayout, QWidget

from catpoint.domain.models import AlarmStatus
from catpoint.services.security_service import SecurityService
from catpoint.ui.adapters.qt_bridge import QtStatusBridge
from catpoint.ui.widgets.control_panel import ControlPanel
from catpoint.ui.widgets.image_panel import ImagePanel
from catpoint.ui.widgets.sensor_panel import SensorPanel
from catpoint.ui.widgets.status_indicator import AlarmStatusIndicator


class MainWindow(QMainWindow):
    """
    Main security window.
    - Top: alarm status indicator
    - Middle: camera feed + arming controls
    - Bottom: sensor management
    """

    def __init__(self, service: SecurityService) -> None:
        super().__init__()
        self.setWindowTitle("Very Secure App")
        self.resize(900, 760)

        self.service = service

        root = QWidget()
        self.setCentralWidget(root)
        layout = QVBoxLayout(root)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        self.status = AlarmStatusIndicator()
        layout.addWidget(self.status)

        middle = QHBoxLayout()
        self.image_panel = ImagePanel(service)
        self.control_panel = ControlPanel(service)
        middle.addWidget(self.image_panel)
        middle.addWidget(self.control_panel, stretch=1)
        layout.addLayout(middle)

        self.sensor_panel = SensorPanel(service)
        layout.addWidget(self.sensor_panel, stretch=1)

        # Service -> UI notifications
        self.bridge = QtStatusBridge(self)
        self.bridge.alarm_status_changed.connect(self._on_alarm_status)
        self.bridge.cat_detected_changed.connect(self.image_panel.show_cat)
        self.bridge.sensors_changed.connect(self.sensor_panel.refresh)
        self.service.add_status_listener(self.bridge)

        self.status.set_status(service.get_alarm_status())

    def _on_alarm_status(self, status: AlarmStatus) -> None:
        self.status.set_status(status)

    def closeEvent(self, event) -> None:
        self.service.remove_status_listener(self.bridge)
        super().closeEvent(event)
