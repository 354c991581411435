"""Centralized logging configuration for the catpoint security system."""

import logging
import logging.handlers
import os
import sys
from typing import Optional, Dict, Any
from pathlib import Path

LOGGER_PREFIX = "catpoint"


class StructuredFormatter(logging.Formatter):
    """Custom formatter that adds structured information to log records."""

    def __init__(self, include_context: bool = True):
        self.include_context = include_context
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with structured information."""
        base_format = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"

        if self.include_context and hasattr(record, 'context'):
            context_str = " | ".join([f"{k}={v}" for k, v in record.context.items()])
            base_format += f" | Context: {context_str}"

        if record.levelno >= logging.ERROR and record.exc_info:
            base_format += " | %(pathname)s:%(lineno)d"

        formatter = logging.Formatter(base_format)
        return formatter.format(record)


class ContextFilter(logging.Filter):
    """Filter that tags log records with the component that produced them."""

    def __init__(self, component_name: Optional[str] = None):
        super().__init__()
        self.component_name = component_name
        self.process_id = os.getpid()

    def filter(self, record: logging.LogRecord) -> bool:
        record.process_id = self.process_id
        if self.component_name:
            record.component = self.component_name
        return True


class LoggingManager:
    """Centralized logging management for the catpoint security system."""

    def __init__(self, log_dir: str = "logs", log_level: int = logging.INFO):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_log_file = self.log_dir / "catpoint.log"
        self.error_log_file = self.log_dir / "errors.log"

        self.log_level = log_level
        self.max_log_size = 10 * 1024 * 1024  # 10MB
        self.backup_count = 5

        self._setup_package_logger()

    def _setup_package_logger(self) -> None:
        """Attach console and rotating file handlers to the package logger."""
        package_logger = logging.getLogger(LOGGER_PREFIX)
        package_logger.setLevel(self.log_level)
        package_logger.handlers.clear()
        package_logger.propagate = False

        # Console handler
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(StructuredFormatter(include_context=False))
        package_logger.addHandler(console_handler)

        # Main log file handler (rotating)
        main_file_handler = logging.handlers.RotatingFileHandler(
            self.main_log_file,
            maxBytes=self.max_log_size,
            backupCount=self.backup_count
        )
        main_file_handler.setLevel(logging.DEBUG)
        main_file_handler.setFormatter(StructuredFormatter(include_context=True))
        package_logger.addHandler(main_file_handler)

        # Error log file handler (errors and critical only)
        error_file_handler = logging.handlers.RotatingFileHandler(
            self.error_log_file,
            maxBytes=self.max_log_size,
            backupCount=self.backup_count
        )
        error_file_handler.setLevel(logging.ERROR)
        error_file_handler.setFormatter(StructuredFormatter(include_context=True))
        package_logger.addHandler(error_file_handler)

        package_logger.info("Logging system initialized")

    def set_log_level(self, level: int) -> None:
        """Set the log level of the package logger."""
        self.log_level = level
        logging.getLogger(LOGGER_PREFIX).setLevel(level)

    def close(self) -> None:
        """Flush and detach all handlers owned by this manager."""
        package_logger = logging.getLogger(LOGGER_PREFIX)
        for handler in list(package_logger.handlers):
            handler.close()
            package_logger.removeHandler(handler)
        package_logger.propagate = True


# Installed by setup_logging(); component loggers work without it
logging_manager: Optional[LoggingManager] = None

_component_loggers: Dict[str, logging.Logger] = {}


def get_logger(component_name: str) -> logging.Logger:
    """Get or create a logger for a specific component."""
    if component_name in _component_loggers:
        return _component_loggers[component_name]

    logger = logging.getLogger(f"{LOGGER_PREFIX}.{component_name}")
    logger.addFilter(ContextFilter(component_name))
    _component_loggers[component_name] = logger
    return logger


def log_with_context(logger: logging.Logger, level: int,
                     message: str, context: Optional[Dict[str, Any]] = None) -> None:
    """Log message with additional key=value context information."""
    if not logger.isEnabledFor(level):
        return
    if context:
        record = logger.makeRecord(
            logger.name, level, "", 0, message, (), None
        )
        record.context = context
        logger.handle(record)
    else:
        logger.log(level, message)


def setup_logging(log_level: str = "INFO", log_dir: str = "logs") -> LoggingManager:
    """Setup centralized logging system."""
    global logging_manager

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if logging_manager is not None:
        logging_manager.close()
    logging_manager = LoggingManager(log_dir, numeric_level)

    return logging_manager
