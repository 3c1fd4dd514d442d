"""Configuration validation utilities."""

import logging
import os
from pathlib import Path

from membercard.config.types import AppConfig
from membercard.exceptions import ConfigError


MEMBER_ID_PLACEHOLDER = "{member_id}"

VALID_BACKENDS = ('memory', 'json', 'sqlite')

def validate_api_config(config: AppConfig) -> None:
    """Validate the membership endpoint settings."""
    api = config.api
    if not api.request_url:
        raise ConfigError("Member card request URL is not configured")
    
    if MEMBER_ID_PLACEHOLDER not in api.request_url:
        raise ConfigError(
            f"Member card request URL must contain {MEMBER_ID_PLACEHOLDER}",
            {"request_url": api.request_url}
        )
    
    if not api.bearer_token:
        raise ConfigError("Member card bearer token is not configured")
    
    if api.timeout is not None and api.timeout <= 0:
        raise ConfigError("Request timeout must be positive", {"timeout": api.timeout})

def validate_storage_config(config: AppConfig) -> None:
    """Validate storage backend and create its directory."""
    storage = config.storage
    if storage.backend not in VALID_BACKENDS:
        raise ConfigError(
            f"Unknown storage backend {storage.backend}",
            {"backend": storage.backend, "valid": list(VALID_BACKENDS)}
        )
    
    if storage.backend != 'memory':
        if not storage.path:
            raise ConfigError(f"Storage backend {storage.backend} requires a path")
        storage_dir = os.path.dirname(storage.path)
        if storage_dir:
            Path(storage_dir).mkdir(parents=True, exist_ok=True)

def validate_logging_config(config: AppConfig) -> None:
    """Validate log level and create the log directory."""
    if not isinstance(logging.getLevelName(config.log_level), int):
        raise ConfigError(f"Invalid log level {config.log_level}")
    
    if config.log_file:
        log_dir = os.path.dirname(config.log_file)
        if log_dir:
            Path(log_dir).mkdir(parents=True, exist_ok=True)

def validate_config(config: AppConfig) -> None:
    """Validate complete configuration.
    
    Raises:
        ConfigError: If any section is invalid
    """
    validate_api_config(config)
    validate_storage_config(config)
    validate_logging_config(config)
