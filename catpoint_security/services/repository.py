"""Sensor and status repositories."""

import json
import os
from typing import Dict, Optional, Set

from ..models.security import AlarmStatus, ArmingStatus, Sensor
from .interfaces import SecurityRepositoryInterface
from .error_handler import SensorNotFoundError
from ..utils import ensure_parent_directory
from ..logging_config import get_logger

logger = get_logger("repository")


class InMemorySecurityRepository(SecurityRepositoryInterface):
    """Repository holding sensors and statuses in memory."""

    def __init__(self,
                 alarm_status: AlarmStatus = AlarmStatus.NO_ALARM,
                 arming_status: ArmingStatus = ArmingStatus.DISARMED):
        self._sensors: Dict[str, Sensor] = {}
        self._alarm_status = alarm_status
        self._arming_status = arming_status
        self._cat_detected = False

    def add_sensor(self, sensor: Sensor) -> None:
        self._sensors[sensor.sensor_id] = sensor
        logger.info(f"Added sensor {sensor.name} ({sensor.sensor_type.value})")
        self._changed()

    def remove_sensor(self, sensor: Sensor) -> None:
        if sensor.sensor_id not in self._sensors:
            raise SensorNotFoundError(sensor.name)
        del self._sensors[sensor.sensor_id]
        logger.info(f"Removed sensor {sensor.name}")
        self._changed()

    def update_sensor(self, sensor: Sensor) -> None:
        if sensor.sensor_id not in self._sensors:
            raise SensorNotFoundError(sensor.name)
        self._sensors[sensor.sensor_id] = sensor
        self._changed()

    def get_sensor(self, sensor: Sensor) -> Sensor:
        try:
            return self._sensors[sensor.sensor_id]
        except KeyError:
            raise SensorNotFoundError(sensor.name) from None

    def get_sensors(self) -> Set[Sensor]:
        return set(self._sensors.values())

    def find_sensor(self, name: str) -> Sensor:
        """Look up a sensor by name."""
        for sensor in sorted(self._sensors.values()):
            if sensor.name == name:
                return sensor
        raise SensorNotFoundError(name)

    def get_alarm_status(self) -> AlarmStatus:
        return self._alarm_status

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._alarm_status = alarm_status
        self._changed()

    def get_arming_status(self) -> ArmingStatus:
        return self._arming_status

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        self._arming_status = arming_status
        self._changed()

    def get_cat_detected(self) -> bool:
        return self._cat_detected

    def set_cat_detected(self, cat_detected: bool) -> None:
        self._cat_detected = cat_detected
        self._changed()

    def _changed(self) -> None:
        """Hook called after every mutation."""
        pass


class JsonSecurityRepository(InMemorySecurityRepository):
    """Repository persisting sensors and statuses to a JSON file.

    The whole document is rewritten after every mutation, so a process
    restarted from the same file sees the last applied state. A missing file
    starts from the defaults; an unreadable one is replaced by them.
    """

    def __init__(self, file_path: str):
        super().__init__()
        self.file_path = file_path
        self.load()

    def load(self) -> None:
        """Load repository state from file or keep defaults."""
        if not os.path.exists(self.file_path):
            logger.debug(f"No repository file at {self.file_path}, starting from defaults")
            return

        try:
            with open(self.file_path, 'r') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise TypeError(f"expected a JSON object, got {type(data).__name__}")
            alarm_status = AlarmStatus(data.get('alarm_status', AlarmStatus.NO_ALARM.value))
            arming_status = ArmingStatus(data.get('arming_status', ArmingStatus.DISARMED.value))
            cat_detected = bool(data.get('cat_detected', False))
            sensors = [Sensor.from_dict(item) for item in data.get('sensors', [])]
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Error loading repository from {self.file_path}: {e}. Using defaults.")
            return

        self._alarm_status = alarm_status
        self._arming_status = arming_status
        self._cat_detected = cat_detected
        self._sensors = {sensor.sensor_id: sensor for sensor in sensors}
        logger.debug(f"Loaded {len(self._sensors)} sensors from {self.file_path}")

    def save(self) -> None:
        """Write repository state to file."""
        data = {
            'alarm_status': self._alarm_status.value,
            'arming_status': self._arming_status.value,
            'cat_detected': self._cat_detected,
            'sensors': [sensor.to_dict() for sensor in sorted(self._sensors.values())]
        }

        ensure_parent_directory(self.file_path)
        with open(self.file_path, 'w') as f:
            json.dump(data, f, indent=2)

    def _changed(self) -> None:
        self.save()


def create_repository(file_path: Optional[str] = None) -> InMemorySecurityRepository:
    """Create a JSON-backed repository, or an in-memory one without a path."""
    if file_path:
        return JsonSecurityRepository(file_path)
    return InMemorySecurityRepository()
