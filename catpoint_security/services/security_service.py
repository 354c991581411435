"""Security service facade used by front-ends."""

from typing import List, Optional, Set

import numpy as np

from ..models.events import SecurityEvent
from ..models.security import AlarmStatus, ArmingStatus, CatDetectionResult, Sensor
from .alarm_state_machine import AlarmStateMachine
from .interfaces import ImageServiceInterface, SecurityRepositoryInterface, StatusListener
from .error_handler import ErrorSeverity, global_error_handler, with_error_handling
from ..logging_config import get_logger

logger = get_logger("security_service")


class SecurityService:
    """Receives requests from front-ends and routes them to the alarm state machine.

    Front-ends never set the alarm status themselves; they report arming
    changes, sensor changes and images, and observe results through
    registered status listeners.
    """

    def __init__(self,
                 repository: SecurityRepositoryInterface,
                 image_service: ImageServiceInterface,
                 confidence_threshold: float = 0.5):
        self.repository = repository
        self.image_service = image_service
        self.confidence_threshold = confidence_threshold
        self.state_machine = AlarmStateMachine(repository)
        self._listeners: List[StatusListener] = []

        global_error_handler.register_component("image_service")

    def add_status_listener(self, listener: StatusListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def get_alarm_status(self) -> AlarmStatus:
        return self.repository.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        return self.repository.get_arming_status()

    def get_sensors(self) -> Set[Sensor]:
        return self.repository.get_sensors()

    def add_sensor(self, sensor: Sensor) -> None:
        self.repository.add_sensor(sensor)

    def remove_sensor(self, sensor: Sensor) -> None:
        self.repository.remove_sensor(sensor)

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Change the arming status; arming resets all sensors."""
        self._dispatch(SecurityEvent.arming_status_changed(arming_status))
        if arming_status.is_armed:
            for listener in self._listeners:
                listener.sensor_status_changed()

    def change_sensor_activation_status(self, sensor: Sensor, active: bool) -> None:
        """Report a sensor becoming active or inactive."""
        if active:
            event = SecurityEvent.sensor_activated(sensor)
        else:
            event = SecurityEvent.sensor_deactivated(sensor)
        self._dispatch(event)
        for listener in self._listeners:
            listener.sensor_status_changed()

    def process_image(self, image: np.ndarray) -> Optional[bool]:
        """Classify an image and feed the outcome to the state machine.

        Returns whether a cat was found, or None when the classifier failed;
        a failed classification leaves the alarm state untouched.
        """
        cat = self._classify(image)
        if cat is None:
            logger.warning("Image classification failed, alarm state unchanged")
            return None

        self._dispatch(SecurityEvent.image_result(CatDetectionResult(contains_cat=cat)))
        for listener in self._listeners:
            listener.cat_detected(cat)
        return cat

    @with_error_handling("image_service", ErrorSeverity.HIGH)
    def _classify(self, image: np.ndarray) -> bool:
        return self.image_service.classify(image, self.confidence_threshold)

    def _dispatch(self, event: SecurityEvent) -> AlarmStatus:
        previous = self.repository.get_alarm_status()
        current = self.state_machine.dispatch(event)
        if current != previous:
            for listener in self._listeners:
                listener.notify(current)
        return current
