"""Service interfaces and abstract base classes."""

from abc import ABC, abstractmethod
from typing import Set

import numpy as np

from ..models.security import AlarmStatus, ArmingStatus, CatDetectionResult, Sensor


class SecurityRepositoryInterface(ABC):
    """Interface for sensor and status storage."""

    @abstractmethod
    def add_sensor(self, sensor: Sensor) -> None:
        """Add a sensor."""
        pass

    @abstractmethod
    def remove_sensor(self, sensor: Sensor) -> None:
        """Remove a sensor, raising SensorNotFoundError if unknown."""
        pass

    @abstractmethod
    def update_sensor(self, sensor: Sensor) -> None:
        """Store the current state of a sensor, raising SensorNotFoundError if unknown."""
        pass

    @abstractmethod
    def get_sensor(self, sensor: Sensor) -> Sensor:
        """Get the stored sensor with the same id, raising SensorNotFoundError if unknown."""
        pass

    @abstractmethod
    def get_sensors(self) -> Set[Sensor]:
        """Get all sensors."""
        pass

    @abstractmethod
    def get_alarm_status(self) -> AlarmStatus:
        """Get current alarm status."""
        pass

    @abstractmethod
    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Store alarm status."""
        pass

    @abstractmethod
    def get_arming_status(self) -> ArmingStatus:
        """Get current arming status."""
        pass

    @abstractmethod
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Store arming status."""
        pass

    @abstractmethod
    def get_cat_detected(self) -> bool:
        """Get whether the latest image result showed a cat."""
        pass

    @abstractmethod
    def set_cat_detected(self, cat_detected: bool) -> None:
        """Store whether the latest image result showed a cat."""
        pass


class ImageServiceInterface(ABC):
    """Interface for cat image classification."""

    @abstractmethod
    def detect(self, image: np.ndarray) -> CatDetectionResult:
        """Classify an image and report the best cat confidence."""
        pass

    def classify(self, image: np.ndarray, confidence_threshold: float) -> bool:
        """Return True if the image contains a cat at or above the threshold."""
        result = self.detect(image)
        return result.contains_cat and result.confidence >= confidence_threshold


class StatusListener(ABC):
    """Interface for front-ends observing the security service."""

    @abstractmethod
    def notify(self, alarm_status: AlarmStatus) -> None:
        """Called when the alarm status changes."""
        pass

    @abstractmethod
    def cat_detected(self, cat: bool) -> None:
        """Called with the outcome of every image scan."""
        pass

    @abstractmethod
    def sensor_status_changed(self) -> None:
        """Called when one or more sensors changed their active flag."""
        pass
