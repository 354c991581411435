"""Security system data models."""

import uuid
from dataclasses import dataclass, field
from enum import Enum


class AlarmStatus(Enum):
    """Overall alert level reported to the user."""
    NO_ALARM = "NO_ALARM"
    PENDING_ALARM = "PENDING_ALARM"
    ALARM = "ALARM"

    @property
    def description(self) -> str:
        return _ALARM_DESCRIPTIONS[self]


_ALARM_DESCRIPTIONS = {
    AlarmStatus.NO_ALARM: "Cool and Good",
    AlarmStatus.PENDING_ALARM: "I'm in Danger...",
    AlarmStatus.ALARM: "Awooga!",
}


class ArmingStatus(Enum):
    """Whether the system is monitoring, and in which mode."""
    DISARMED = "DISARMED"
    ARMED_HOME = "ARMED_HOME"
    ARMED_AWAY = "ARMED_AWAY"

    @property
    def description(self) -> str:
        return _ARMING_DESCRIPTIONS[self]

    @property
    def is_armed(self) -> bool:
        return self is not ArmingStatus.DISARMED


_ARMING_DESCRIPTIONS = {
    ArmingStatus.DISARMED: "Disarmed",
    ArmingStatus.ARMED_HOME: "Armed - At Home",
    ArmingStatus.ARMED_AWAY: "Armed - Away",
}


class SensorType(Enum):
    """Kinds of monitored devices."""
    DOOR = "DOOR"
    WINDOW = "WINDOW"
    MOTION = "MOTION"


@dataclass(eq=False)
class Sensor:
    """A monitored device with a binary active/inactive state.

    Sensors compare and hash by ``sensor_id`` so a copy loaded from storage
    is the same sensor as the one held by a front-end.
    """
    name: str
    sensor_type: SensorType
    active: bool = False
    sensor_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.sensor_id == other.sensor_id

    def __hash__(self) -> int:
        return hash(self.sensor_id)

    def __lt__(self, other: "Sensor") -> bool:
        return self._sort_key() < other._sort_key()

    def _sort_key(self) -> tuple:
        return (self.name, self.sensor_type.value, self.sensor_id)

    def to_dict(self) -> dict:
        """Serialize sensor to a JSON-compatible dictionary."""
        return {
            'sensor_id': self.sensor_id,
            'name': self.name,
            'sensor_type': self.sensor_type.value,
            'active': self.active
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Sensor":
        """Create a sensor from a dictionary produced by ``to_dict``."""
        return cls(
            name=data['name'],
            sensor_type=SensorType(data['sensor_type']),
            active=bool(data.get('active', False)),
            sensor_id=data['sensor_id']
        )


@dataclass
class CatDetectionResult:
    """Outcome of an image classification."""
    contains_cat: bool
    confidence: float = 0.0
