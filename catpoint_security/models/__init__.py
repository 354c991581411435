"""Data models for the catpoint security system."""

from .security import AlarmStatus, ArmingStatus, SensorType, Sensor, CatDetectionResult
from .events import SecurityEventType, SecurityEvent
from .config import SecurityConfig

__all__ = ['AlarmStatus', 'ArmingStatus', 'SensorType', 'Sensor', 'CatDetectionResult',
           'SecurityEventType', 'SecurityEvent', 'SecurityConfig']
