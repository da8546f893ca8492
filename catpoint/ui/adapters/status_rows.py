from __future__ import annotations

from typing import Iterable, List, Tuple

from catpoint.domain.models import ArmingStatus, Sensor

SensorRow = Tuple[str, str, str]  # name, type, state


def sensor_rows(sensors: Iterable[Sensor]) -> List[SensorRow]:
    """
    Rows for the sensor table, sorted by sensor name.
    """
    rows: List[SensorRow] = []
    for s in sorted(sensors):
        rows.append(
            (
                s.name,
                s.sensor_type.value.title(),
                "Active" if s.active else "Inactive",
            )
        )
    return rows


def arming_options() -> List[Tuple[ArmingStatus, str]]:
    """Arming buttons in display order."""
    return [(status, status.description) for status in ArmingStatus]


def cat_message(cat: bool) -> str:
    if cat:
        return "DANGER - CAT DETECTED"
    return "Camera Feed - No Cats Detected"
