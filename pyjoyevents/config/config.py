"""
Configuration management system for PyJoyEvents.

This module provides centralized configuration management with support for
JSON files, environment variables, and runtime overrides.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union


class Config:
    """
    Central configuration manager for PyJoyEvents.

    Handles loading configuration from multiple sources:
    1. Default values (hardcoded)
    2. User config file (~/.pyjoyevents/config.json)
    3. Project config file (./config.json) or an explicit file
    4. Environment variables (PYJOYEVENTS_<SECTION>_<KEY>)
    5. Runtime overrides
    """

    ENV_PREFIX = "PYJOYEVENTS_"

    # Default configuration values
    _defaults = {
        "app": {
            "name": "PyJoyEvents",
            "version": "0.1.0",
            "debug": False,
            "log_level": "INFO",
        },
        "input": {
            "max_gamepads": 4,
            "notification_queue_size": 64,
        },
        "monitor": {
            "poll_rate": 60,
            "axis_precision": 3,
        },
    }

    def __init__(self, config_file: Optional[Union[str, Path]] = None, load_env: bool = True):
        """
        Initialize configuration manager.

        Args:
            config_file: Optional path to specific config file
            load_env: Read PYJOYEVENTS_* environment variables
        """
        self._config: Dict[str, Any] = {}
        self._config_file = config_file
        self._load_env = load_env
        self._load_configuration()

    def _load_configuration(self) -> None:
        """Load configuration from all sources in priority order."""
        self._config = self._deep_copy(self._defaults)

        user_config_path = self._get_user_config_path()
        if user_config_path.exists():
            self._load_from_file(user_config_path)

        if self._config_file:
            config_path = Path(self._config_file)
            if config_path.exists():
                self._load_from_file(config_path)
        else:
            project_config = Path("config.json")
            if project_config.exists():
                self._load_from_file(project_config)

        if self._load_env:
            self._load_from_env()

    def _get_user_config_path(self) -> Path:
        """Get the user-specific config file path."""
        return Path.home() / ".pyjoyevents" / "config.json"

    def _load_from_file(self, file_path: Path) -> None:
        """Load configuration from JSON file."""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
            self._deep_merge(self._config, file_config)
        except (OSError, json.JSONDecodeError) as e:
            # Import here to avoid circular imports
            from ..core.logging import get_logger
            get_logger("config").warning("Could not load config file", extra={
                "path": str(file_path),
                "error": str(e)
            })

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX):
                continue
            # PYJOYEVENTS_INPUT_MAX_GAMEPADS -> ["input", "max_gamepads"]
            config_key = key[len(self.ENV_PREFIX):].lower().split('_', 1)
            if len(config_key) == 2:
                self._set_nested_value(self._config, config_key, self._parse_env_value(value))

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to appropriate type."""
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

        if value.lower() in ('true', 'yes', 'on'):
            return True
        elif value.lower() in ('false', 'no', 'off'):
            return False

        return value

    def _set_nested_value(self, config: Dict[str, Any], keys: list, value: Any) -> None:
        """Set a nested configuration value."""
        for key in keys[:-1]:
            if not isinstance(config.get(key), dict):
                config[key] = {}
            config = config[key]
        config[keys[-1]] = value

    def _deep_copy(self, obj: Any) -> Any:
        """Deep copy configuration object."""
        if isinstance(obj, dict):
            return {k: self._deep_copy(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._deep_copy(v) for v in obj]
        else:
            return obj

    def _deep_merge(self, target: Dict[str, Any], source: Dict[str, Any]) -> None:
        """Deep merge source dict into target dict."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._deep_merge(target[key], value)
            else:
                target[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key in dot notation (e.g., "input.max_gamepads")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self._config
        try:
            for k in key.split('.'):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key: Configuration key in dot notation
            value: Value to set
        """
        self._set_nested_value(self._config, key.split('.'), value)

    def save(self, file_path: Optional[Union[str, Path]] = None) -> None:
        """
        Save current configuration to file.

        Args:
            file_path: Optional path to save to, defaults to user config
        """
        file_path = Path(file_path) if file_path else self._get_user_config_path()
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)

    def reload(self) -> None:
        """Reload configuration from all sources."""
        self._load_configuration()

    def get_all(self) -> Dict[str, Any]:
        """Get the complete configuration dictionary."""
        return self._deep_copy(self._config)

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self._config = self._deep_copy(self._defaults)

    @property
    def debug(self) -> bool:
        """Debug mode flag."""
        return self.get("app.debug", False)

    @property
    def log_level(self) -> str:
        """Logging level."""
        return self.get("app.log_level", "INFO")


# Global configuration instance
_config_instance: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config_instance
    _config_instance = config


def reset_config() -> None:
    """Reset the global configuration instance."""
    global _config_instance
    _config_instance = None
