"""
Logging configuration for the air quality graph service.

Provides structured logging to both console and file. Records logged while
a device is being processed carry its serial number as %(sn)s.
"""

import logging
import os
import threading
from pathlib import Path
from typing import Optional
from datetime import datetime

# Device serial number of the current worker thread
_device = threading.local()

NO_DEVICE = "-"


def current_device() -> str:
    """Serial number of the device processed by this thread, or '-'."""
    return getattr(_device, "sn", None) or NO_DEVICE


class DeviceFilter(logging.Filter):
    """Attach the current device serial number to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.sn = current_device()
        return True


def setup_logger(
    name: str = "air_quality_graph",
    log_file: Optional[str] = None,
    log_level: str = "INFO"
) -> logging.Logger:
    """
    Set up application logger with console and file handlers.

    Args:
        name: Logger name
        log_file: Path to log file. If None, uses LOG_FILE env var or default
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    if log_file is None:
        log_file = os.getenv("LOG_FILE", "logs/air_quality_graph.log")

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # File lines identify the worker thread and the device it is processing
    detailed_formatter = logging.Formatter(
        fmt="%(asctime)s - %(levelname)s - %(threadName)s [%(sn)s] - %(filename)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_formatter = logging.Formatter(
        fmt="%(asctime)s - %(levelname)s - [%(sn)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    device_filter = DeviceFilter()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(console_formatter)
    console_handler.addFilter(device_filter)
    logger.addHandler(console_handler)

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(detailed_formatter)
    file_handler.addFilter(device_filter)
    logger.addHandler(file_handler)

    logger.propagate = False

    return logger


class LoggerContext:
    """
    Context manager for logging specific operations.

    If sn is given, records logged on this thread inside the block are
    tagged with it.
    """

    def __init__(self, logger: logging.Logger, operation: str, sn: Optional[str] = None):
        """
        Initialize logger context.

        Args:
            logger: Logger instance
            operation: Name of the operation being logged
            sn: Serial number of the device the operation runs for
        """
        self.logger = logger
        self.operation = operation
        self.sn = sn
        self.start_time = None
        self._previous_sn = None

    def __enter__(self):
        """Enter context and log start."""
        if self.sn is not None:
            self._previous_sn = getattr(_device, "sn", None)
            _device.sn = self.sn
        self.start_time = datetime.now()
        self.logger.info(f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context and log completion or error."""
        duration = (datetime.now() - self.start_time).total_seconds()

        try:
            if exc_type is not None:
                self.logger.error(
                    f"Failed {self.operation} after {duration:.2f}s: {exc_val}",
                    exc_info=True
                )
                return False

            self.logger.info(f"Completed {self.operation} in {duration:.2f}s")
            return True
        finally:
            if self.sn is not None:
                _device.sn = self._previous_sn
