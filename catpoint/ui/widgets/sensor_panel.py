from __future__ import annotations

from typing import List, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
)

from catpoint.core.errors import CatPointError
from catpoint.domain.models import Sensor, SensorType
from catpoint.services.security_service import SecurityService
from catpoint.ui.adapters.status_rows import SensorRow, sensor_rows
from catpoint.ui.theme import COLOR_CRIT, COLOR_OK, COLOR_TEXT_MUTED


class SensorPanel(QFrame):
    """
    Sensor table with add / toggle / remove controls.
    """

    def __init__(self, service: SecurityService, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("Card")
        self._service = service

        title = QLabel("Sensor Management")
        title.setStyleSheet("font-size: 14px; font-weight: 700;")

        self.table = QTableWidget(0, 3)
        self.table.setHorizontalHeaderLabels(["Sensor", "Type", "State"])
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)

        self.toggle_button = QPushButton("Activate / Deactivate")
        self.toggle_button.clicked.connect(self._toggle_selected)
        self.remove_button = QPushButton("Remove Sensor")
        self.remove_button.clicked.connect(self._remove_selected)

        actions = QHBoxLayout()
        actions.addWidget(self.toggle_button)
        actions.addWidget(self.remove_button)
        actions.addStretch(1)

        self.name_edit = QLineEdit()
        self.name_edit.setPlaceholderText("Sensor name")
        self.type_combo = QComboBox()
        self.type_combo.addItems([t.value for t in SensorType])
        self.add_button = QPushButton("Add New Sensor")
        self.add_button.clicked.connect(self._add_sensor)

        add_row = QHBoxLayout()
        add_row.addWidget(self.name_edit, 1)
        add_row.addWidget(self.type_combo)
        add_row.addWidget(self.add_button)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)
        layout.addWidget(title)
        layout.addWidget(self.table)
        layout.addLayout(actions)
        layout.addLayout(add_row)

        self.refresh()

    def refresh(self) -> None:
        self.set_rows(sensor_rows(self._service.get_sensors()))

    def set_rows(self, rows: List[SensorRow]) -> None:
        self.table.setRowCount(len(rows))
        for i, (name, typ, state) in enumerate(rows):
            self._item(i, 0, name)
            self._item(i, 1, typ)
            self._item(i, 2, state, active=(state == "Active"))
        self.table.resizeColumnsToContents()

    def _item(self, r: int, c: int, text: str, active: bool = False) -> None:
        it = QTableWidgetItem(text)
        it.setFlags(it.flags() & ~Qt.ItemIsEditable)
        if c == 2:
            it.setTextAlignment(Qt.AlignCenter)
            it.setForeground(QBrush(QColor(COLOR_CRIT if active else COLOR_OK)))
        self.table.setItem(r, c, it)

    def _selected_sensor(self) -> Optional[Sensor]:
        row = self.table.currentRow()
        if row < 0:
            return None
        item = self.table.item(row, 0)
        if item is None:
            return None
        name = item.text()
        for s in self._service.get_sensors():
            if s.name == name:
                return s
        return None

    def _add_sensor(self) -> None:
        name = self.name_edit.text().strip()
        if not name:
            return
        try:
            self._service.add_sensor(Sensor(name=name, sensor_type=SensorType(self.type_combo.currentText())))
        except CatPointError as e:
            self._show_error(e)
        self.name_edit.clear()
        self.refresh()

    def _toggle_selected(self) -> None:
        sensor = self._selected_sensor()
        if sensor is None:
            return
        try:
            self._service.change_sensor_activation_status(sensor, not sensor.active)
        except CatPointError as e:
            self._show_error(e)
        self.refresh()

    def _remove_selected(self) -> None:
        sensor = self._selected_sensor()
        if sensor is None:
            return
        try:
            self._service.remove_sensor(sensor)
        except CatPointError as e:
            self._show_error(e)
        self.refresh()

    def _show_error(self, e: Exception) -> None:
        box = QMessageBox(self)
        box.setIcon(QMessageBox.Warning)
        box.setWindowTitle("Sensor update failed")
        box.setText(str(e))
        box.setStyleSheet(f"QLabel {{ color: {COLOR_CRIT}; }} QMessageBox {{ color: {COLOR_TEXT_MUTED}; }}")
        box.open()
