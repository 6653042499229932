"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    OptoScreenError,
    UnknownMeasurementCodeError,
    UnknownProfileError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "OptoScreenError",
    "UnknownMeasurementCodeError",
    "UnknownProfileError",
]
