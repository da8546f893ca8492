from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel

from catpoint.domain.models import AlarmStatus
from catpoint.ui.theme import COLOR_OK, COLOR_TEXT_MUTED, LEVEL_COLORS


class AlarmStatusIndicator(QFrame):
    """
    Alarm status widget: colored dot + status description.
    """

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("Card")

        self._dot = QLabel("●")
        self._dot.setStyleSheet(f"color: {COLOR_OK}; font-size: 16px;")
        self._title = QLabel("System Status:")
        self._title.setStyleSheet(f"color: {COLOR_TEXT_MUTED};")
        self._text = QLabel("")
        self._text.setStyleSheet("font-weight: 600;")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 10, 12, 10)
        layout.addWidget(self._dot, 0, Qt.AlignVCenter)
        layout.addWidget(self._title, 0, Qt.AlignVCenter)
        layout.addWidget(self._text, 0, Qt.AlignVCenter)
        layout.addStretch(1)

    def text(self) -> str:
        return self._text.text()

    def set_status(self, status: AlarmStatus) -> None:
        color = LEVEL_COLORS.get(status.level, COLOR_OK)
        self._dot.setStyleSheet(f"color: {color}; font-size: 16px;")
        self._text.setText(status.description)
