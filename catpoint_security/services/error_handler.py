"""Error types and component error tracking."""

import functools
import traceback
from collections import deque
from datetime import datetime, timedelta
from typing import Deque, Dict, Optional, Any
from dataclasses import dataclass, field
from enum import Enum

from ..logging_config import get_logger

# Oldest records are dropped beyond this many
MAX_ERROR_RECORDS = 1000


class SecurityError(Exception):
    """Base class for errors raised by security system collaborators."""


class SensorNotFoundError(SecurityError):
    """Raised by a repository asked about a sensor it does not hold."""

    def __init__(self, sensor_ref: str):
        super().__init__(f"Sensor not found: {sensor_ref}")
        self.sensor_ref = sensor_ref


class ImageLoadError(SecurityError):
    """Raised when an image file cannot be read."""


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ComponentStatus(Enum):
    """Component status levels."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass
class ErrorRecord:
    """Record of an error occurrence."""
    component_name: str
    error: Exception
    severity: ErrorSeverity
    timestamp: datetime = field(default_factory=datetime.now)
    traceback_str: str = ""


class ErrorHandler:
    """Central error tracking for security system components."""

    def __init__(self, max_records: int = MAX_ERROR_RECORDS):
        self.logger = get_logger("error_handler")
        self.error_records: Deque[ErrorRecord] = deque(maxlen=max_records)
        self.component_error_counts: Dict[str, int] = {}
        self.component_status: Dict[str, ComponentStatus] = {}

    def register_component(self, component_name: str) -> None:
        """Register a component for error tracking."""
        self.component_error_counts.setdefault(component_name, 0)
        self.component_status.setdefault(component_name, ComponentStatus.HEALTHY)
        self.logger.debug(f"Component registered: {component_name}")

    def handle_error(self, component_name: str, error: Exception, severity: ErrorSeverity) -> None:
        """Record an error raised by a component."""
        error_record = ErrorRecord(
            component_name=component_name,
            error=error,
            severity=severity,
            traceback_str=traceback.format_exc()
        )
        self.error_records.append(error_record)

        self.component_error_counts[component_name] = self.component_error_counts.get(component_name, 0) + 1

        if severity == ErrorSeverity.CRITICAL:
            self.component_status[component_name] = ComponentStatus.FAILED
        elif severity == ErrorSeverity.HIGH:
            self.component_status[component_name] = ComponentStatus.DEGRADED

        self.logger.error(f"Error in {component_name}: {error} (Severity: {severity.value})")

    def reset_error_counts(self, component_name: Optional[str] = None) -> None:
        """Reset error counts for a component or all components."""
        components = [component_name] if component_name else list(self.component_error_counts)
        for component in components:
            if component in self.component_error_counts:
                self.component_error_counts[component] = 0
                self.component_status[component] = ComponentStatus.HEALTHY

    def get_component_health(self) -> Dict[str, ComponentStatus]:
        """Get health status of all registered components."""
        return self.component_status

    def get_error_summary(self, hours: int = 24) -> Dict[str, Any]:
        """Get summary of errors in the last N hours."""
        cutoff_time = datetime.now() - timedelta(hours=hours)
        recent_errors = [e for e in self.error_records if e.timestamp >= cutoff_time]

        component_counts: Dict[str, int] = {}
        severity_counts = {severity.value: 0 for severity in ErrorSeverity}

        for error in recent_errors:
            component_counts[error.component_name] = component_counts.get(error.component_name, 0) + 1
            severity_counts[error.severity.value] += 1

        return {
            "total_errors": len(recent_errors),
            "component_counts": component_counts,
            "severity_counts": severity_counts,
            "time_period_hours": hours
        }


# Create global error handler instance
global_error_handler = ErrorHandler()


def with_error_handling(component_name: str, severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                        error_handler: Optional[ErrorHandler] = None):
    """Decorator recording errors with the error handler.

    Critical errors are re-raised; otherwise the wrapped call returns None.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            handler = error_handler or global_error_handler
            try:
                return func(*args, **kwargs)
            except Exception as e:
                handler.handle_error(component_name, e, severity)
                if severity == ErrorSeverity.CRITICAL:
                    raise
                return None
        return wrapper
    return decorator
