"""Configuration data models."""

from dataclasses import dataclass
from typing import Optional

from ..config.defaults import DEFAULT_PATHS


@dataclass
class SecurityConfig:
    """System configuration settings."""
    # Image classification
    confidence_threshold: float = 0.5
    image_service: str = "fake"  # fake, cascade
    cascade_path: Optional[str] = None

    # Storage
    repository_path: str = DEFAULT_PATHS["repository_file"]

    # Logging
    log_level: str = "INFO"
    log_dir: str = DEFAULT_PATHS["logs_dir"]
