"""
Catpoint Security System

A home security simulator: arm and disarm the system, toggle door, window
and motion sensors, and scan camera images for cats. An alarm state machine
turns those events into the alarm status shown to the user.
"""

__version__ = "1.0.0"
__author__ = "Catpoint Security System"

# Import core components
from .config_manager import ConfigManager
from .models import (
    AlarmStatus,
    ArmingStatus,
    SensorType,
    Sensor,
    CatDetectionResult,
    SecurityEventType,
    SecurityEvent,
    SecurityConfig
)
from .services import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListener,
    AlarmStateMachine,
    SecurityService
)

__all__ = [
    # Core management
    'ConfigManager',

    # Data models
    'AlarmStatus',
    'ArmingStatus',
    'SensorType',
    'Sensor',
    'CatDetectionResult',
    'SecurityEventType',
    'SecurityEvent',
    'SecurityConfig',

    # Services
    'SecurityRepositoryInterface',
    'ImageServiceInterface',
    'StatusListener',
    'AlarmStateMachine',
    'SecurityService'
]
