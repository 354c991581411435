"""Services for the catpoint security system."""

from .interfaces import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListener
)
from .alarm_state_machine import AlarmStateMachine
from .security_service import SecurityService

__all__ = [
    'SecurityRepositoryInterface',
    'ImageServiceInterface',
    'StatusListener',
    'AlarmStateMachine',
    'SecurityService'
]
