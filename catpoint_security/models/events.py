"""Events consumed by the alarm state machine."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .security import ArmingStatus, CatDetectionResult, Sensor


class SecurityEventType(Enum):
    """Kinds of events the alarm state machine reacts to."""
    SENSOR_ACTIVATED = "sensor_activated"
    SENSOR_DEACTIVATED = "sensor_deactivated"
    ARMING_STATUS_CHANGED = "arming_status_changed"
    IMAGE_RESULT = "image_result"


@dataclass(frozen=True)
class SecurityEvent:
    """A discrete event with the payload its type requires."""
    event_type: SecurityEventType
    sensor: Optional[Sensor] = None
    arming_status: Optional[ArmingStatus] = None
    result: Optional[CatDetectionResult] = None

    @classmethod
    def sensor_activated(cls, sensor: Sensor) -> "SecurityEvent":
        return cls(SecurityEventType.SENSOR_ACTIVATED, sensor=sensor)

    @classmethod
    def sensor_deactivated(cls, sensor: Sensor) -> "SecurityEvent":
        return cls(SecurityEventType.SENSOR_DEACTIVATED, sensor=sensor)

    @classmethod
    def arming_status_changed(cls, status: ArmingStatus) -> "SecurityEvent":
        return cls(SecurityEventType.ARMING_STATUS_CHANGED, arming_status=status)

    @classmethod
    def image_result(cls, result: CatDetectionResult) -> "SecurityEvent":
        return cls(SecurityEventType.IMAGE_RESULT, result=result)
