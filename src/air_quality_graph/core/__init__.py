"""
Core utilities for the air quality graph service.

Provides configuration, logging, constants, date handling and exceptions.
"""

from .config import Config
from .logger import setup_logger, LoggerContext
from . import constants
from .date_utils import DateUtils, enough_time_passed
from .exceptions import (
    InvalidTimestamp,
    UpstreamFetchError,
    PersistenceError,
    BudgetExhausted,
)

__all__ = [
    "Config",
    "setup_logger",
    "LoggerContext",
    "constants",
    "DateUtils",
    "enough_time_passed",
    "InvalidTimestamp",
    "UpstreamFetchError",
    "PersistenceError",
    "BudgetExhausted",
]
