from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from catpoint.domain.models import AlarmStatus


class QtStatusBridge(QObject):
    """
    Status listener that re-emits notifications as Qt signals.

    The security service calls listeners on whatever thread invoked it.
    Widgets must only be touched from the GUI thread, so panels connect to
    these signals instead of registering with the service directly; Qt queues
    cross-thread emissions onto the receiver's thread.
    """

    alarm_status_changed = Signal(object)
    cat_detected_changed = Signal(bool)
    sensors_changed = Signal()

    def notify(self, status: AlarmStatus) -> None:
        self.alarm_status_changed.emit(status)

    def cat_detected(self, cat: bool) -> None:
        self.cat_detected_changed.emit(cat)

    def sensor_status_changed(self) -> None:
        self.sensors_changed.emit()
