"""
Exception handling framework for PyJoyEvents.

Provides custom exception classes and error handling utilities for
consistent error management throughout the library and its CLI.
"""

import sys
import traceback
from typing import Any, Dict, Optional, Type
from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class PyJoyEventsError(Exception):
    """
    Base exception class for all PyJoyEvents-specific errors.

    Provides structured error information including severity, error codes,
    and additional context data.
    """

    def __init__(self,
                 message: str,
                 error_code: Optional[str] = None,
                 severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                 context: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        """
        Initialize PyJoyEvents error.

        Args:
            message: Human-readable error message
            error_code: Unique error identifier
            severity: Error severity level
            context: Additional context information
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.severity = severity
        self.context = context or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
        }

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"{self.error_code}: {self.message}"]

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"Context: {context_str}")

        if self.cause:
            parts.append(f"Caused by: {self.cause}")

        return " | ".join(parts)


# Configuration errors
class ConfigurationError(PyJoyEventsError):
    """Raised when there's a configuration-related error."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        context = kwargs.get('context', {})
        if config_key:
            context['config_key'] = config_key
        kwargs['context'] = context
        super().__init__(message, **kwargs)


class InvalidConfigValueError(ConfigurationError):
    """Raised when a configuration value is invalid."""

    def __init__(self, key: str, value: Any, expected: str, **kwargs):
        message = f"Invalid value '{value}' for config key '{key}'. Expected: {expected}"
        super().__init__(message, config_key=key, **kwargs)


# Input system errors
class InputError(PyJoyEventsError):
    """Base class for input-related errors."""
    pass


class StateIndexError(InputError, IndexError):
    """Raised when an axis or button index is outside a snapshot's shape."""

    def __init__(self, kind: str, index: int, count: int, **kwargs):
        message = f"{kind} index {index} out of range (count {count})"
        context = kwargs.get('context', {})
        context.update({'kind': kind, 'index': index, 'count': count})
        kwargs['context'] = context
        kwargs.setdefault('severity', ErrorSeverity.HIGH)
        super().__init__(message, **kwargs)


class SnapshotShapeError(InputError, ValueError):
    """Raised when two snapshots with different shapes are compared."""

    def __init__(self, current: tuple, previous: tuple, **kwargs):
        message = (f"Cannot diff snapshots of different shape: "
                   f"{current[0]} axes/{current[1]} buttons vs "
                   f"{previous[0]} axes/{previous[1]} buttons")
        kwargs.setdefault('severity', ErrorSeverity.CRITICAL)
        super().__init__(message, **kwargs)


class SourceError(InputError):
    """Raised when a host snapshot or notification source cannot be used."""
    pass


class ErrorHandler:
    """
    Centralized error handling and reporting system.

    Provides utilities for error logging and crash reporting.
    """

    def handle_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Handle an error with appropriate logging.

        Args:
            error: The exception to handle
            context: Additional context information
        """
        # Import here to avoid circular imports
        from .logging import get_logger

        logger = get_logger("error_handler")

        error_context = {
            "error_type": type(error).__name__,
            "error_message": str(error),
            "traceback": traceback.format_exc(),
        }

        if context:
            error_context.update(context)

        if isinstance(error, PyJoyEventsError):
            error_context.update({
                "error_code": error.error_code,
                "severity": error.severity.value,
                "error_context": error.context,
            })

            if error.severity in (ErrorSeverity.CRITICAL, ErrorSeverity.HIGH):
                logger.error("PyJoyEvents error occurred", extra=error_context)
            else:
                logger.warning("PyJoyEvents error occurred", extra=error_context)
        else:
            logger.error("Unexpected error occurred", extra=error_context)

    def handle_crash(self, error: Exception) -> None:
        """
        Handle a critical error that is about to end the process.

        Args:
            error: The critical exception
        """
        from .logging import get_logger

        logger = get_logger("crash_handler")
        logger.critical("Critical error - application may crash", extra={
            "error_type": type(error).__name__,
            "error_message": str(error),
            "traceback": traceback.format_exc(),
        })

    def setup_global_exception_handler(self) -> None:
        """Set up global exception handler for unhandled exceptions."""
        def exception_handler(exc_type: Type[BaseException],
                              exc_value: BaseException,
                              exc_traceback) -> None:
            if issubclass(exc_type, KeyboardInterrupt):
                sys.__excepthook__(exc_type, exc_value, exc_traceback)
                return

            self.handle_crash(exc_value)
            sys.__excepthook__(exc_type, exc_value, exc_traceback)

        sys.excepthook = exception_handler


# Global error handler instance
_error_handler: Optional[ErrorHandler] = None


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler()
    return _error_handler


def handle_error(error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """
    Handle an error using the global error handler.

    Args:
        error: The exception to handle
        context: Additional context information
    """
    get_error_handler().handle_error(error, context)


def handle_crash(error: Exception) -> None:
    """Handle a critical error using the global error handler."""
    get_error_handler().handle_crash(error)


def setup_exception_handling() -> None:
    """Set up global exception handling."""
    get_error_handler().setup_global_exception_handler()
