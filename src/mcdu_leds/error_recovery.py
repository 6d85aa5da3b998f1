"""
Error Recovery - containment for flaky panel hardware.

Provides:
- Error classification (hardware vs transient)
- safe_call: run a driver operation, log and swallow any failure
"""

import logging
from enum import Enum
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ErrorType(Enum):
    """Classification of error types."""
    TRANSIENT = "transient"  # Temporary, next command may succeed
    HARDWARE = "hardware"    # Panel/bus failure, may recover
    CONFIG = "config"        # Configuration error, permanent


class HardwareError(Exception):
    """Hardware-related error raised by MCDU drivers."""
    pass


def describe_error(error: Exception) -> str:
    """str(error), or the exception type name if that itself fails."""
    try:
        return str(error)
    except Exception:
        return type(error).__name__


def classify_error(error: Exception) -> ErrorType:
    """
    Classify an exception into an error type.

    Args:
        error: The exception to classify

    Returns:
        ErrorType classification
    """
    if isinstance(error, HardwareError):
        return ErrorType.HARDWARE

    error_str = describe_error(error).lower()

    if any(x in error_str for x in ['usb', 'hid', 'bus', 'device', 'hardware', 'timeout']):
        return ErrorType.HARDWARE

    if any(x in error_str for x in ['config', 'invalid', 'missing', 'not found']):
        return ErrorType.CONFIG

    return ErrorType.TRANSIENT


def safe_call(
    func: Callable[[], T],
    default: Optional[T] = None,
    log_error: bool = True,
    context: str = "",
) -> Optional[T]:
    """
    Safely call a function, returning default on error.

    Args:
        func: Function to call
        default: Value to return on error
        log_error: If True, log errors at error level
        context: Short description of the operation, used in the log line

    Returns:
        Function result or default
    """
    try:
        return func()
    except Exception as e:
        if log_error:
            logger.error(
                "Error %s: %s (%s)",
                context or "in call", describe_error(e), classify_error(e).value,
            )
        return default
