from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QPixmap
from PySide6.QtWidgets import QFileDialog, QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout

from catpoint.core.errors import CatPointError
from catpoint.services.security_service import SecurityService
from catpoint.ui.adapters.status_rows import cat_message
from catpoint.ui.theme import COLOR_CRIT, COLOR_TEXT_MUTED

IMAGE_WIDTH = 300
IMAGE_HEIGHT = 225


class ImagePanel(QFrame):
    """
    Camera feed: load a picture, then hand it to the service for scanning.
    """

    def __init__(self, service: SecurityService, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("Card")
        self._service = service
        self._image: Optional[QImage] = None

        self.header = QLabel(cat_message(False))
        self.header.setStyleSheet("font-size: 14px; font-weight: 700;")

        self.picture = QLabel()
        self.picture.setFixedSize(IMAGE_WIDTH, IMAGE_HEIGHT)
        self.picture.setAlignment(Qt.AlignCenter)
        self.picture.setStyleSheet(f"border: 1px solid #1f2937; color: {COLOR_TEXT_MUTED};")
        self.picture.setText("No image loaded")

        self.refresh_button = QPushButton("Refresh Camera")
        self.refresh_button.clicked.connect(self._choose_image)
        self.scan_button = QPushButton("Scan Picture")
        self.scan_button.clicked.connect(self.scan)

        buttons = QHBoxLayout()
        buttons.addWidget(self.refresh_button)
        buttons.addWidget(self.scan_button)
        buttons.addStretch(1)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)
        layout.addWidget(self.header)
        layout.addWidget(self.picture)
        layout.addLayout(buttons)

    def set_image(self, image: QImage) -> None:
        self._image = image
        pix = QPixmap.fromImage(image).scaled(IMAGE_WIDTH, IMAGE_HEIGHT, Qt.KeepAspectRatio)
        self.picture.setPixmap(pix)

    def show_cat(self, cat: bool) -> None:
        self.header.setText(cat_message(cat))
        self.header.setStyleSheet(
            f"font-size: 14px; font-weight: 700; color: {COLOR_CRIT if cat else '#e2e8f0'};"
        )

    def scan(self) -> None:
        if self._image is None:
            return
        try:
            self._service.process_image(self._image)
        except CatPointError as e:
            self.header.setText(f"Scan failed: {e}")

    def _choose_image(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Select picture", "", "Images (*.png *.jpg *.jpeg *.bmp)")
        if not path:
            return
        image = QImage(path)
        if image.isNull():
            self.header.setText(f"Invalid image selected: {path}")
            return
        self.set_image(image)
