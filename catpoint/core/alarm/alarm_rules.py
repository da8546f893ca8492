"""
Alarm state machine rules.

Every function here is pure: it takes an :class:`AlarmContext` (and the event
payload, where there is one) and returns the alarm status the service must
write, or ``None`` for "no change". The functions never touch the repository,
the listeners or the cat latch; the security service owns those side effects.

Transition summary
------------------
Sensor activated (inactive -> active):
    DISARMED      -> no change
    armed         -> NO_ALARM -> PENDING_ALARM -> ALARM (ALARM is absorbing)

Sensor deactivated (active -> inactive):
    PENDING_ALARM and no sensor active -> NO_ALARM, otherwise no change

Arming changed:
    DISARMED                  -> NO_ALARM
    ARMED_HOME with cat latch -> ALARM
    both armed modes reset every sensor to inactive

Image classified:
    cat and ARMED_HOME         -> ALARM
    no cat and no sensor active -> NO_ALARM (arming is not consulted)
"""

from __future__ import annotations

from typing import Dict, Optional

from catpoint.core.alarm.alarm_base import AlarmContext, AlarmRule, SensorTransition
from catpoint.domain.models import AlarmStatus, ArmingStatus


def _unhandled(kind: str, value: object) -> ValueError:
    return ValueError(f"Unhandled {kind}: {value!r}")


def sensor_activated(ctx: AlarmContext) -> Optional[AlarmStatus]:
    """
    Next alarm status after a sensor goes from inactive to active.

    Parameters
    ----------
    ctx
        Evaluation context. Only ``arming_status`` and ``alarm_status`` are read.

    Returns
    -------
    AlarmStatus or None
        Status to write, or None if the alarm status must not change.
    """
    if ctx.arming_status is ArmingStatus.DISARMED:
        return None
    if ctx.arming_status not in (ArmingStatus.ARMED_HOME, ArmingStatus.ARMED_AWAY):
        raise _unhandled("arming status", ctx.arming_status)

    if ctx.alarm_status is AlarmStatus.NO_ALARM:
        return AlarmStatus.PENDING_ALARM
    if ctx.alarm_status is AlarmStatus.PENDING_ALARM:
        return AlarmStatus.ALARM
    if ctx.alarm_status is AlarmStatus.ALARM:
        return None
    raise _unhandled("alarm status", ctx.alarm_status)


def sensor_deactivated(ctx: AlarmContext) -> Optional[AlarmStatus]:
    """
    Next alarm status after a sensor goes from active to inactive.

    ``ctx.any_sensor_active`` must reflect the repository after the sensor
    update has been persisted.
    """
    if ctx.alarm_status is AlarmStatus.PENDING_ALARM and not ctx.any_sensor_active:
        return AlarmStatus.NO_ALARM
    return None


def sensor_unchanged(ctx: AlarmContext) -> Optional[AlarmStatus]:
    """Redundant sensor writes never affect the alarm status."""
    return None


_SENSOR_RULES: Dict[SensorTransition, AlarmRule] = {
    SensorTransition.ACTIVATED: sensor_activated,
    SensorTransition.DEACTIVATED: sensor_deactivated,
    SensorTransition.UNCHANGED: sensor_unchanged,
}


def rule_for_sensor_transition(transition: SensorTransition) -> AlarmRule:
    """Return the rule that handles ``transition``."""
    try:
        return _SENSOR_RULES[transition]
    except KeyError:
        raise _unhandled("sensor transition", transition) from None


def arming_changed(new_status: ArmingStatus, ctx: AlarmContext) -> Optional[AlarmStatus]:
    """
    Alarm status to write when the operator selects ``new_status``.

    This is evaluated *before* the sensor reset sweep and before the new
    arming status is persisted, so ``ctx.arming_status`` still holds the old
    value and is not consulted.

    Parameters
    ----------
    new_status
        Arming status being selected.
    ctx
        Evaluation context; only ``cat_on_cam`` is read.

    Returns
    -------
    AlarmStatus or None
        NO_ALARM when disarming, ALARM when arming at home with a cat on
        camera, otherwise None.
    """
    if new_status is ArmingStatus.DISARMED:
        return AlarmStatus.NO_ALARM
    if new_status is ArmingStatus.ARMED_HOME:
        return AlarmStatus.ALARM if ctx.cat_on_cam else None
    if new_status is ArmingStatus.ARMED_AWAY:
        return None
    raise _unhandled("arming status", new_status)


def resets_sensors(new_status: ArmingStatus) -> bool:
    """Whether selecting ``new_status`` sweeps every sensor back to inactive."""
    if new_status is ArmingStatus.DISARMED:
        return False
    if new_status in (ArmingStatus.ARMED_HOME, ArmingStatus.ARMED_AWAY):
        return True
    raise _unhandled("arming status", new_status)


def image_classified(cat: bool, ctx: AlarmContext) -> Optional[AlarmStatus]:
    """
    Alarm status to write after the camera image has been classified.

    Parameters
    ----------
    cat
        Classifier result for the new image.
    ctx
        Evaluation context; ``arming_status`` and ``any_sensor_active`` are read.

    Returns
    -------
    AlarmStatus or None
        ALARM for a cat while armed at home, NO_ALARM for a cat-free image with
        all sensors inactive, otherwise None.
    """
    if cat and ctx.arming_status is ArmingStatus.ARMED_HOME:
        return AlarmStatus.ALARM
    if not cat and not ctx.any_sensor_active:
        return AlarmStatus.NO_ALARM
    return None
