"""
Structured logging system for PyJoyEvents.

Provides centralized logging configuration with support for console and
rotating file outputs in human-readable or JSON form.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union
from datetime import datetime
import json


# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRIBUTES = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'exc_info', 'exc_text',
    'stack_info', 'taskName', 'message', 'asctime',
})


class StructuredFormatter(logging.Formatter):
    """
    Custom formatter that outputs structured log messages.

    Supports both JSON and human-readable formats.
    """

    def __init__(self, fmt_type: str = "human", include_extra: bool = True):
        """
        Initialize structured formatter.

        Args:
            fmt_type: Format type ("human" or "json")
            include_extra: Include extra fields in output
        """
        self.fmt_type = fmt_type
        self.include_extra = include_extra
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured data."""
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if self.include_extra:
            extra_fields = {}
            for key, value in record.__dict__.items():
                if key in _RECORD_ATTRIBUTES:
                    continue
                try:
                    json.dumps(value)
                    extra_fields[key] = value
                except (TypeError, ValueError):
                    extra_fields[key] = str(value)

            if extra_fields:
                log_data["extra"] = extra_fields

        if self.fmt_type == "json":
            return json.dumps(log_data, ensure_ascii=False)
        return self._format_human_readable(log_data)

    def _format_human_readable(self, log_data: Dict[str, Any]) -> str:
        """Format log data as human-readable string."""
        timestamp = log_data["timestamp"][:19]
        level = log_data["level"]
        logger = log_data["logger"]
        message = log_data["message"]
        location = f"{log_data['module']}:{log_data['function']}:{log_data['line']}"

        level_colors = {
            "DEBUG": "\033[36m",
            "INFO": "\033[32m",
            "WARNING": "\033[33m",
            "ERROR": "\033[31m",
            "CRITICAL": "\033[35m",
        }
        reset_color = "\033[0m"

        use_colors = hasattr(sys.stderr, 'isatty') and sys.stderr.isatty()

        if use_colors and level in level_colors:
            level_str = f"{level_colors[level]}{level:<8}{reset_color}"
        else:
            level_str = f"{level:<8}"

        formatted = f"{timestamp} {level_str} {logger:<24} {message}"

        if level == "DEBUG":
            formatted += f" [{location}]"

        if "exception" in log_data:
            formatted += f"\n{log_data['exception']}"

        if log_data.get("extra"):
            extra_str = ", ".join(f"{k}={v}" for k, v in log_data["extra"].items())
            formatted += f" | {extra_str}"

        return formatted


class LoggerManager:
    """
    Centralized logger management for PyJoyEvents.

    All loggers live under the ``pyjoyevents`` namespace. Handlers are only
    attached to that namespace, so embedding applications keep control of
    the root logger.
    """

    ROOT_NAME = "pyjoyevents"

    def __init__(self):
        self._loggers: Dict[str, logging.Logger] = {}
        self._configured = False
        self._log_dir: Optional[Path] = None

    def configure(self,
                  log_level: str = "INFO",
                  log_dir: Optional[Union[str, Path]] = None,
                  console_output: bool = True,
                  file_output: bool = False,
                  json_format: bool = False,
                  max_file_size: int = 5 * 1024 * 1024,  # 5MB
                  backup_count: int = 3) -> None:
        """
        Configure the logging system.

        Args:
            log_level: Minimum log level to output
            log_dir: Directory for log files (creates if doesn't exist)
            console_output: Enable console output
            file_output: Enable file output
            json_format: Use JSON format for file output
            max_file_size: Maximum size of each log file
            backup_count: Number of backup files to keep
        """
        if self._configured:
            return

        level = getattr(logging, log_level.upper())
        package_logger = logging.getLogger(self.ROOT_NAME)
        package_logger.setLevel(level)
        package_logger.handlers.clear()

        if console_output:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level)
            console_handler.setFormatter(StructuredFormatter("human"))
            package_logger.addHandler(console_handler)

        if file_output:
            self._log_dir = Path(log_dir) if log_dir else Path.home() / ".pyjoyevents" / "logs"
            self._log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                self._log_dir / "pyjoyevents.log",
                maxBytes=max_file_size,
                backupCount=backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(logging.DEBUG)
            if json_format:
                file_handler.setFormatter(StructuredFormatter("json"))
            else:
                file_handler.setFormatter(StructuredFormatter("human", include_extra=False))
            package_logger.addHandler(file_handler)

        self._configured = True

        self.get_logger("logging").info("Logging system configured", extra={
            "log_level": log_level,
            "log_dir": str(self._log_dir) if self._log_dir else None,
            "console_output": console_output,
            "file_output": file_output,
            "json_format": json_format
        })

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get or create a logger with the given name.

        Args:
            name: Logger name (typically component name)

        Returns:
            Logger instance under the package namespace
        """
        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(f"{self.ROOT_NAME}.{name}")
        return self._loggers[name]

    def set_level(self, level: str, logger_name: Optional[str] = None) -> None:
        """
        Set log level for a specific logger or the whole package.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            logger_name: Specific logger name, or None for all
        """
        log_level = getattr(logging, level.upper())

        if logger_name:
            self.get_logger(logger_name).setLevel(log_level)
            return

        package_logger = logging.getLogger(self.ROOT_NAME)
        package_logger.setLevel(log_level)
        for handler in package_logger.handlers:
            if not isinstance(handler, logging.handlers.RotatingFileHandler):
                handler.setLevel(log_level)

    def shutdown(self) -> None:
        """Detach and close the handlers this manager installed."""
        package_logger = logging.getLogger(self.ROOT_NAME)
        for handler in list(package_logger.handlers):
            handler.close()
            package_logger.removeHandler(handler)
        self._configured = False

    @property
    def is_configured(self) -> bool:
        """Whether ``configure`` has installed handlers."""
        return self._configured

    @property
    def log_directory(self) -> Optional[Path]:
        """Get the log directory path."""
        return self._log_dir


# Global logger manager instance
_logger_manager: Optional[LoggerManager] = None


def get_logger_manager() -> LoggerManager:
    """Get the global logger manager instance."""
    global _logger_manager
    if _logger_manager is None:
        _logger_manager = LoggerManager()
    return _logger_manager


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for the given component.

    Args:
        name: Logger name (typically component name)

    Returns:
        Logger instance
    """
    return get_logger_manager().get_logger(name)


def configure_logging(log_level: Optional[str] = None, **kwargs) -> None:
    """
    Configure the logging system with the given parameters.

    Args:
        log_level: Minimum log level, defaults to the configured setting
        **kwargs: Additional LoggerManager.configure options
    """
    # Import here to avoid circular imports
    from ..config import get_settings

    settings = get_settings()
    get_logger_manager().configure(log_level=log_level or settings.log_level, **kwargs)


def shutdown_logging() -> None:
    """Shutdown the logging system."""
    get_logger_manager().shutdown()
