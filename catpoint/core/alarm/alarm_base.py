"""
Alarm evaluation contracts (context and sensor transitions).

This module defines the data structures that form the contract between:

- The security service (stateful orchestrator) which reads the repository and
  builds an :class:`AlarmContext`
- The alarm rules (pure functions in ``alarm_rules``) which turn a context plus
  an event into the next :class:`~catpoint.domain.models.AlarmStatus`

The objects here are immutable and hashable so they can be logged, compared in
tests and passed across threads without surprises.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from catpoint.domain.models import AlarmStatus, ArmingStatus


@dataclass(frozen=True)
class AlarmContext:
    """
    Everything a rule needs to know to decide the next alarm status.

    The security service builds one context per evaluation from fresh
    repository reads, so rules never see cached state.

    Parameters
    ----------
    arming_status
        Current arming status.
    alarm_status
        Current alarm status.
    any_sensor_active
        Whether at least one known sensor is active (after the triggering
        update has been persisted).
    cat_on_cam
        Latest image classification result held by the service.
    """

    arming_status: ArmingStatus
    alarm_status: AlarmStatus
    any_sensor_active: bool = False
    cat_on_cam: bool = False


class SensorTransition(str, Enum):
    """
    Classification of a single sensor write.

    Members
    -------
    ACTIVATED : str
        inactive -> active
    DEACTIVATED : str
        active -> inactive
    UNCHANGED : str
        redundant write (active -> active or inactive -> inactive)
    """

    ACTIVATED = "ACTIVATED"
    DEACTIVATED = "DEACTIVATED"
    UNCHANGED = "UNCHANGED"

    @classmethod
    def of(cls, was_active: bool, active: bool) -> "SensorTransition":
        if was_active == active:
            return cls.UNCHANGED
        return cls.ACTIVATED if active else cls.DEACTIVATED


class AlarmRule(Protocol):
    """
    Protocol for a single-event alarm rule.

    A rule is a pure function of the context. Returning ``None`` means
    "leave the alarm status alone"; returning a status means the service must
    write it (and notify listeners) even if it equals the current one.
    """

    def __call__(self, ctx: AlarmContext) -> Optional[AlarmStatus]:
        ...
