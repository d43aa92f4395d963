"""
Settings module for PyJoyEvents.

Provides convenient access to configuration settings with validation and type hints.
"""

from typing import Any, Optional

from ..core.exceptions import InvalidConfigValueError
from .config import get_config, Config


class Settings:
    """
    High-level settings interface with validation and type safety.

    Numeric values read from the underlying Config are clamped to their
    valid range. A value that is not a number at all raises
    InvalidConfigValueError.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize settings with optional config instance.

        Args:
            config: Optional Config instance, uses global if not provided
        """
        self._config = config or get_config()

    # Application settings
    @property
    def app_name(self) -> str:
        """Application name."""
        return self._config.get("app.name", "PyJoyEvents")

    @property
    def app_version(self) -> str:
        """Application version."""
        return self._config.get("app.version", "0.1.0")

    @property
    def debug_mode(self) -> bool:
        """Debug mode enabled."""
        return bool(self._config.get("app.debug", False))

    @property
    def log_level(self) -> str:
        """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""
        level = str(self._config.get("app.log_level", "INFO")).upper()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        return level if level in valid_levels else "INFO"

    # Input settings
    @property
    def max_gamepads(self) -> int:
        """Maximum number of host slots a pygame source reports."""
        return self._bounded_int("input.max_gamepads", 4, 1, 16)

    @property
    def notification_queue_size(self) -> int:
        """Capacity of the buffered hotplug notice queue."""
        return self._bounded_int("input.notification_queue_size", 64, 1, 4096)

    # Monitor settings
    @property
    def poll_rate(self) -> int:
        """Polls per second for the CLI event loop."""
        return self._bounded_int("monitor.poll_rate", 60, 1, 1000)

    @property
    def axis_precision(self) -> int:
        """Decimal places used when printing axis values."""
        return self._bounded_int("monitor.axis_precision", 3, 0, 9)

    # Convenience methods
    def update_setting(self, key: str, value: Any) -> None:
        """
        Update a setting value.

        Args:
            key: Setting key in dot notation
            value: New value
        """
        self._config.set(key, value)

    def validate(self) -> None:
        """
        Read every numeric setting once.

        Raises:
            InvalidConfigValueError: If a setting is not a number
        """
        for name in ("max_gamepads", "notification_queue_size", "poll_rate", "axis_precision"):
            getattr(self, name)

    def _bounded_int(self, key: str, default: int, low: int, high: int) -> int:
        value = self._config.get(key, default)
        try:
            number = int(value)
        except (TypeError, ValueError) as e:
            raise InvalidConfigValueError(key, value, f"integer between {low} and {high}",
                                          cause=e) from e
        return max(low, min(number, high))


# Global settings instance
_settings_instance: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings_instance
    _settings_instance = settings


def reset_settings() -> None:
    """Reset the global settings instance."""
    global _settings_instance
    _settings_instance = None
