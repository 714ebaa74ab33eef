"""
Config Module - Black Box Interface

Purpose: Server runtime configuration (bind address, logging, reload)
Interface: get_config(), ConfigModule.get(), ConfigModule.get_config_schema()
Hidden: Environment parsing, validation logic

Upstream credentials are not kept here; see chatkit_proxy.config.provider.
"""

import os
from typing import Any, Dict

# Configuration Contract: Required and Optional Keys

REQUIRED_CONFIG_KEYS = {
    "host": "API server bind address",
    "port": "API server port",
    "log_level": "Logging level (DEBUG, INFO, WARNING, ERROR)",
}

OPTIONAL_CONFIG_KEYS = {
    "debug": {
        "description": "Enable debug mode (autoreload)",
        "default": False,
    },
}

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigModule:
    """Configuration management module."""

    def __init__(self):
        """Initialize with environment variables."""
        self._config = self._load_from_env()
        self._validate_required_keys()

    def _validate_required_keys(self) -> None:
        """
        Validate that all required configuration keys are present.

        Raises:
            ValueError: If required keys are missing or the log level is unknown
        """
        missing_keys = []
        for key in REQUIRED_CONFIG_KEYS:
            if key not in self._config or self._config[key] is None:
                missing_keys.append(key)

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}. "
                f"Check environment variables and deployment configuration."
            )

        if self._config["log_level"] not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid LOG_LEVEL {self._config['log_level']!r}. "
                f"Expected one of: {', '.join(VALID_LOG_LEVELS)}"
            )

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment."""
        port_env = os.getenv("API_PORT", "8080")
        try:
            port = int(port_env)
        except ValueError:
            raise ValueError(f"API_PORT must be an integer, got {port_env!r}")

        return {
            "host": os.getenv("API_HOST", "0.0.0.0"),
            "port": port,
            "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
            "debug": os.getenv("DEBUG", "false").lower() == "true",
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return self._config.get(key, default)

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration values."""
        return self._config.copy()

    @staticmethod
    def get_config_schema() -> Dict[str, Any]:
        """
        Get the configuration schema (contract) for this module.

        Returns:
            Dictionary with 'required' and 'optional' key specifications

        Example:
            >>> schema = ConfigModule.get_config_schema()
            >>> print(schema['required']['port'])
            'API server port'
        """
        return {
            "required": REQUIRED_CONFIG_KEYS.copy(),
            "optional": OPTIONAL_CONFIG_KEYS.copy(),
        }


# Singleton instance
_instance = None


def get_config() -> ConfigModule:
    """Get the configuration module singleton."""
    global _instance
    if _instance is None:
        _instance = ConfigModule()
    return _instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _instance
    _instance = None


__all__ = ["get_config", "reset_config", "ConfigModule"]
