from __future__ import annotations

import logging
from dataclasses import dataclass, field

from catpoint.domain.models import AlarmStatus

STATUS_LOGGER_NAME = "catpoint.status"


@dataclass
class LoggingStatusListener:
    """Status listener that writes every notification to a logger."""

    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(STATUS_LOGGER_NAME))

    def notify(self, status: AlarmStatus) -> None:
        level = logging.WARNING if status is AlarmStatus.ALARM else logging.INFO
        self.logger.log(level, "Alarm status: %s (%s)", status.value, status.description)

    def cat_detected(self, cat: bool) -> None:
        self.logger.info("Camera image classified: %s", "cat detected" if cat else "no cat")

    def sensor_status_changed(self) -> None:
        self.logger.debug("Sensor status changed")
