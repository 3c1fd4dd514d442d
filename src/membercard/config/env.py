"""Environment variable handling for configuration."""

import os
from typing import Any

from membercard.config.types import ApiSection
from membercard.config.types import GlobalConfig
from membercard.config.types import LoggingSection
from membercard.config.types import StorageSection


class EnvConfig:
    """Environment variable configuration."""

    # Mapping of environment variables to configuration paths
    ENV_MAPPING = {
        'MEMBERCARD_REQUEST_URL': ('api', 'request_url'),
        'MEMBERCARD_BEARER_TOKEN': ('api', 'bearer_token'),
        'MEMBERCARD_TIMEOUT': ('api', 'timeout'),
        'MEMBERCARD_STORAGE_BACKEND': ('storage', 'backend'),
        'MEMBERCARD_STORAGE_PATH': ('storage', 'path'),
        'MEMBERCARD_LOG_LEVEL': ('logging', 'level'),
        'MEMBERCARD_LOG_FILE': ('logging', 'file'),
        'MEMBERCARD_LOG_MAX_SIZE': ('logging', 'max_size'),
        'MEMBERCARD_LOG_BACKUP_COUNT': ('logging', 'backup_count'),
    }

    @staticmethod
    def get_env_value(env_var: str, default: Any | None = None) -> Any | None:
        """Get value from environment variable with default."""
        return os.getenv(env_var, default)

    @staticmethod
    def _set_nested_value(config: dict[str, Any], path: tuple, value: Any) -> None:
        """Set value in nested dictionary using path tuple."""
        current = config
        for part in path[:-1]:
            if part not in current:
                current[part] = {}
            current = current[part]
        current[path[-1]] = value

    @classmethod
    def update_config_from_env(cls, config: dict[str, Any]) -> None:
        """Update configuration dictionary with environment variables.
        
        Args:
            config: Configuration dictionary to update
        """
        for env_var, path in cls.ENV_MAPPING.items():
            value = cls.get_env_value(env_var)
            if value is not None:
                cls._set_nested_value(config, path, value)

    @classmethod
    def get_api_config(cls) -> ApiSection:
        """Get member card API configuration from environment."""
        return {
            'request_url': cls.get_env_value('MEMBERCARD_REQUEST_URL', ''),
            'bearer_token': cls.get_env_value('MEMBERCARD_BEARER_TOKEN', ''),
            'timeout': cls.get_env_value('MEMBERCARD_TIMEOUT')
        }

    @classmethod
    def get_storage_config(cls) -> StorageSection:
        """Get session storage configuration from environment."""
        return {
            'backend': cls.get_env_value('MEMBERCARD_STORAGE_BACKEND', 'json'),
            'path': cls.get_env_value('MEMBERCARD_STORAGE_PATH')
        }

    @classmethod
    def get_logging_config(cls) -> LoggingSection:
        """Get logging configuration from environment."""
        return {
            'level': cls.get_env_value('MEMBERCARD_LOG_LEVEL', 'WARNING'),
            'file': cls.get_env_value('MEMBERCARD_LOG_FILE'),
            'max_size': cls.get_env_value('MEMBERCARD_LOG_MAX_SIZE', '10'),
            'backup_count': cls.get_env_value('MEMBERCARD_LOG_BACKUP_COUNT', '5')
        }

    @classmethod
    def get_global_config(cls) -> GlobalConfig:
        """Get global configuration from environment."""
        return {
            'api': cls.get_api_config(),
            'storage': cls.get_storage_config(),
            'logging': cls.get_logging_config()
        }
