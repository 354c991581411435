"""Alarm state machine driven by sensor, arming and image events.

Transitions of the alarm status:

    NO_ALARM      + sensor activated (armed)            -> PENDING_ALARM
    PENDING_ALARM + sensor activated (armed)            -> ALARM
    ALARM         + sensor activated/deactivated        -> ALARM
    PENDING_ALARM + last active sensor deactivated      -> NO_ALARM
    *             + arming set to DISARMED              -> NO_ALARM
    *             + cat detected while ARMED_HOME       -> ALARM
    *             + no cat detected, no sensor active   -> NO_ALARM
    *             + armed home after a cat was seen     -> ALARM

Arming (home or away) resets every sensor to inactive. Sensor events act on
the repository's copy of the sensor with the same id, and whether the latest
image showed a cat is kept in the repository. Each handler decides the next
status before writing anything to the repository, then applies all of its
mutations.
"""

import logging
from typing import Optional

from ..models.events import SecurityEvent, SecurityEventType
from ..models.security import AlarmStatus, ArmingStatus, CatDetectionResult, Sensor
from .interfaces import SecurityRepositoryInterface
from ..logging_config import get_logger, log_with_context

logger = get_logger("alarm_state_machine")


class AlarmStateMachine:
    """Applies alarm rules to the state held by a repository.

    Calls must be serialized by the caller; the machine does no locking.
    """

    def __init__(self, repository: SecurityRepositoryInterface):
        self.repository = repository

        self._handlers = {
            SecurityEventType.SENSOR_ACTIVATED: lambda e: self.handle_sensor_activated(e.sensor),
            SecurityEventType.SENSOR_DEACTIVATED: lambda e: self.handle_sensor_deactivated(e.sensor),
            SecurityEventType.ARMING_STATUS_CHANGED: lambda e: self.handle_arming_status_changed(e.arming_status),
            SecurityEventType.IMAGE_RESULT: lambda e: self.handle_image_result(e.result),
        }

    def dispatch(self, event: SecurityEvent) -> AlarmStatus:
        """Route an event to its handler and return the resulting alarm status."""
        logger.debug(f"Dispatching {event.event_type.value}")
        return self._handlers[event.event_type](event)

    def handle_sensor_activated(self, sensor: Sensor) -> AlarmStatus:
        stored = self.repository.get_sensor(sensor)
        current = self.repository.get_alarm_status()
        next_status = current

        if self.repository.get_arming_status().is_armed:
            if current == AlarmStatus.NO_ALARM:
                next_status = AlarmStatus.PENDING_ALARM
            elif current == AlarmStatus.PENDING_ALARM:
                next_status = AlarmStatus.ALARM

        self._set_active(stored, sensor, True)
        return self._apply(current, next_status, f"sensor {stored.name} activated")

    def handle_sensor_deactivated(self, sensor: Sensor) -> AlarmStatus:
        stored = self.repository.get_sensor(sensor)
        current = self.repository.get_alarm_status()
        if not stored.active:
            logger.debug(f"Sensor {stored.name} already inactive, ignoring")
            sensor.active = False
            return current

        next_status = current
        if current == AlarmStatus.PENDING_ALARM and not self._any_active(exclude=stored):
            next_status = AlarmStatus.NO_ALARM

        self._set_active(stored, sensor, False)
        return self._apply(current, next_status, f"sensor {stored.name} deactivated")

    def handle_arming_status_changed(self, arming_status: ArmingStatus) -> AlarmStatus:
        current = self.repository.get_alarm_status()
        next_status = current

        if arming_status == ArmingStatus.DISARMED:
            next_status = AlarmStatus.NO_ALARM
        else:
            if arming_status == ArmingStatus.ARMED_HOME and self.repository.get_cat_detected():
                next_status = AlarmStatus.ALARM
            for sensor in self.repository.get_sensors():
                if sensor.active:
                    sensor.active = False
                    self.repository.update_sensor(sensor)

        self.repository.set_arming_status(arming_status)
        return self._apply(current, next_status, f"arming set to {arming_status.value}")

    def handle_image_result(self, result: CatDetectionResult) -> AlarmStatus:
        current = self.repository.get_alarm_status()
        next_status = current

        if result.contains_cat:
            if self.repository.get_arming_status() == ArmingStatus.ARMED_HOME:
                next_status = AlarmStatus.ALARM
        elif not self._any_active():
            next_status = AlarmStatus.NO_ALARM

        if self.repository.get_cat_detected() != result.contains_cat:
            self.repository.set_cat_detected(result.contains_cat)
        return self._apply(current, next_status,
                           "cat detected" if result.contains_cat else "no cat detected")

    def _set_active(self, stored: Sensor, sensor: Sensor, active: bool) -> None:
        # The caller's object may be a copy of the stored one
        stored.active = active
        sensor.active = active
        self.repository.update_sensor(stored)

    def _any_active(self, exclude: Optional[Sensor] = None) -> bool:
        return any(s.active for s in self.repository.get_sensors() if s != exclude)

    def _apply(self, current: AlarmStatus, next_status: AlarmStatus, reason: str) -> AlarmStatus:
        if next_status != current:
            self.repository.set_alarm_status(next_status)
            log_with_context(logger, logging.INFO, f"Alarm status {current.value} -> {next_status.value}",
                             {"reason": reason})
        else:
            logger.debug(f"Alarm status unchanged ({current.value}) on {reason}")
        return next_status
