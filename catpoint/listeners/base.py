from __future__ import annotations

from typing import Protocol

from catpoint.domain.models import AlarmStatus


class StatusListener(Protocol):
    """
    Protocol interface for observers of the security service.

    Any object providing these three methods can be registered with
    :meth:`~catpoint.services.security_service.SecurityService.add_status_listener`.
    This enables dependency inversion and makes notification dispatch easy to
    test with fakes.

    Notes
    -----
    Callbacks run synchronously on the thread that called the service. A
    listener that raises is logged and skipped; the state change it was
    observing is not rolled back.

    Methods
    -------
    notify(status)
        The alarm status was written (fired even if the value is unchanged).
    cat_detected(cat)
        A camera image was classified. Fired once per processed image.
    sensor_status_changed()
        A sensor activation flag was written.
    """

    def notify(self, status: AlarmStatus) -> None:
        ...

    def cat_detected(self, cat: bool) -> None:
        ...

    def sensor_status_changed(self) -> None:
        ...
