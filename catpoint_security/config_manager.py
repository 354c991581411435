"""Configuration management with file persistence and validation."""

import json
import os
from dataclasses import asdict
from typing import Optional, Dict, Any

from .models.config import SecurityConfig
from .config.defaults import DEFAULT_PATHS, IMAGE_SERVICES
from .utils import ensure_parent_directory
from .logging_config import get_logger

logger = get_logger("config_manager")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigManager:
    """Manages system configuration with file persistence."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or DEFAULT_PATHS["config_file"]
        self._config: Optional[SecurityConfig] = None
        self.load_config()

    def load_config(self) -> SecurityConfig:
        """Load configuration from file or create default."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    config_dict = json.load(f)
                self._config = SecurityConfig(**config_dict)
            except (json.JSONDecodeError, TypeError) as e:
                logger.warning(f"Error loading config: {e}. Using defaults.")
                self._config = SecurityConfig()
        else:
            self._config = SecurityConfig()
            self.save_config()

        return self._config

    def save_config(self) -> None:
        """Save current configuration to file."""
        if self._config is None:
            return

        ensure_parent_directory(self.config_path)
        with open(self.config_path, 'w') as f:
            json.dump(asdict(self._config), f, indent=2)

    def get_config(self) -> SecurityConfig:
        """Get current configuration."""
        if self._config is None:
            return self.load_config()
        return self._config

    def update_config(self, **kwargs) -> None:
        """Update configuration with new values."""
        if self._config is None:
            self.load_config()

        for key, value in kwargs.items():
            if hasattr(self._config, key):
                setattr(self._config, key, value)
            else:
                logger.warning(f"Ignoring unknown config key: {key}")

        self.save_config()

    def validate_config(self) -> bool:
        """Validate current configuration."""
        if self._config is None:
            return False

        if not isinstance(self._config.confidence_threshold, (int, float)):
            return False
        if not 0.0 <= self._config.confidence_threshold <= 1.0:
            return False

        if self._config.image_service not in IMAGE_SERVICES:
            return False

        if not self._config.repository_path:
            return False

        if str(self._config.log_level).upper() not in LOG_LEVELS:
            return False

        return True

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self._config = SecurityConfig()
        self.save_config()

    def export_config(self) -> Dict[str, Any]:
        """Export current configuration as a dictionary."""
        if not self._config:
            return {}
        return asdict(self._config)

    def import_config(self, config_dict: Dict[str, Any]) -> bool:
        """
        Import configuration from a dictionary.

        Args:
            config_dict: Dictionary containing configuration values

        Returns:
            True if import was successful, False otherwise
        """
        try:
            temp_config = SecurityConfig(**config_dict)
        except (TypeError, ValueError) as e:
            logger.error(f"Error importing config: {e}")
            return False

        old_config = self._config
        self._config = temp_config

        if not self.validate_config():
            self._config = old_config
            return False

        self.save_config()
        return True
