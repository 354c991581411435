"""Configuration components for the catpoint security system."""

from .defaults import (
    DEFAULT_PATHS,
    IMAGE_SERVICES,
    MODEL_SETTINGS
)

__all__ = [
    'DEFAULT_PATHS',
    'IMAGE_SERVICES',
    'MODEL_SETTINGS'
]
