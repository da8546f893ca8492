from __future__ import annotations

from typing import Dict

from PySide6.QtWidgets import QButtonGroup, QFrame, QHBoxLayout, QLabel, QPushButton

from catpoint.domain.models import ArmingStatus
from catpoint.services.security_service import SecurityService
from catpoint.ui.adapters.status_rows import arming_options


class ControlPanel(QFrame):
    """
    One exclusive button per arming status.
    """

    def __init__(self, service: SecurityService, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("Card")
        self._service = service

        title = QLabel("System Control")
        title.setStyleSheet("font-size: 14px; font-weight: 700;")

        self._group = QButtonGroup(self)
        self._group.setExclusive(True)
        self.buttons: Dict[ArmingStatus, QPushButton] = {}

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 10, 12, 10)
        layout.addWidget(title)

        for status, label in arming_options():
            btn = QPushButton(label)
            btn.setObjectName("ArmingButton")
            btn.setCheckable(True)
            btn.clicked.connect(lambda _checked=False, s=status: self._select(s))
            self._group.addButton(btn)
            self.buttons[status] = btn
            layout.addWidget(btn)

        layout.addStretch(1)
        self.sync()

    def sync(self) -> None:
        self.buttons[self._service.get_arming_status()].setChecked(True)

    def _select(self, status: ArmingStatus) -> None:
        self._service.set_arming_status(status)
        self.sync()
