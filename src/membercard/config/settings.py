"""Configuration settings for the member card client."""

import os
from pathlib import Path
from typing import Any

import yaml

from membercard.config.env import EnvConfig
from membercard.config.types import AppConfig
from membercard.config.types import GlobalConfig
from membercard.config.types import MemberCardApiConfig
from membercard.config.types import StorageConfig
from membercard.config.utils import deep_merge
from membercard.config.utils import parse_optional_float
from membercard.config.utils import resolve_path
from membercard.exceptions import ConfigError


CONFIG_FILE_NAME = "config.yaml"

CONFIG_SECTIONS = ("api", "storage", "logging")

DEFAULT_STORAGE_FILES = {
    'json': 'member_session.json',
    'sqlite': 'member_session.db',
}

def _get_config_path(config_dir: str | None = None) -> Path:
    """Get configuration directory path."""
    return resolve_path(config_dir or os.getenv("MEMBERCARD_CONFIG_DIR", os.getcwd()))

def _load_global_config(config_path: Path) -> GlobalConfig:
    """Load global configuration from YAML file and environment.

    Environment values form the base, the YAML file is merged over them and
    explicitly set environment variables are applied last.
    """
    global_config = EnvConfig.get_global_config()
    
    config_file = config_path / CONFIG_FILE_NAME
    if config_file.exists():
        with open(config_file, encoding="utf-8") as f:
            try:
                loaded_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {config_file}", {"error": str(e)}) from e
        if not isinstance(loaded_config, dict):
            raise ConfigError(
                f"Configuration file {config_file} must contain a mapping",
                {"type": type(loaded_config).__name__}
            )
        loaded_config = _normalize_sections(loaded_config, config_file)
        global_config = deep_merge(global_config, loaded_config)
        EnvConfig.update_config_from_env(global_config)
    
    return global_config

def _normalize_sections(loaded_config: dict[str, Any], config_file: Path) -> dict[str, Any]:
    """Drop empty sections and reject sections that are not mappings.

    A section whose keys are all commented out loads as None and keeps the
    environment defaults.
    """
    normalized = {}
    for name, section in loaded_config.items():
        if section is None:
            continue
        if name in CONFIG_SECTIONS and not isinstance(section, dict):
            raise ConfigError(
                f"Section {name} in {config_file} must be a mapping",
                {"section": name, "type": type(section).__name__}
            )
        normalized[name] = section
    return normalized

def _setting(section: dict[str, Any], key: str, default: Any) -> Any:
    """Read a setting, treating an explicit null as unset."""
    value = section.get(key)
    return default if value is None else value

def _build_storage_config(section: dict[str, Any], config_path: Path) -> StorageConfig:
    """Resolve the storage backend and its file location."""
    backend = str(section.get('backend') or 'json').lower()
    path = section.get('path')
    if path is None and backend in DEFAULT_STORAGE_FILES:
        path = DEFAULT_STORAGE_FILES[backend]
    if path is not None:
        path = str(resolve_path(path, config_path))
    return StorageConfig(backend=backend, path=path)

def load_config(config_dir: str | None = None) -> AppConfig:
    """Load configuration from ``config.yaml`` and ``MEMBERCARD_*`` variables.

    Args:
        config_dir: Directory holding ``config.yaml``. Falls back to
            ``MEMBERCARD_CONFIG_DIR`` and then the working directory.

    Returns:
        Populated application configuration

    Raises:
        ConfigError: If the file cannot be parsed or a value has the wrong type
    """
    config_path = _get_config_path(config_dir)
    global_config = _load_global_config(config_path)
    
    api_section = global_config.get('api') or {}
    logging_section = global_config.get('logging') or {}
    
    try:
        api = MemberCardApiConfig(
            request_url=str(api_section.get('request_url') or ''),
            bearer_token=str(api_section.get('bearer_token') or ''),
            timeout=parse_optional_float(api_section.get('timeout'))
        )
        log_max_size = int(_setting(logging_section, 'max_size', 10))
        log_backup_count = int(_setting(logging_section, 'backup_count', 5))
    except (TypeError, ValueError) as e:
        raise ConfigError("Invalid numeric configuration value", {"error": str(e)}) from e
    
    log_file = logging_section.get('file')
    if log_file:
        log_file = str(resolve_path(log_file, config_path))
    
    return AppConfig(
        api=api,
        storage=_build_storage_config(global_config.get('storage') or {}, config_path),
        config_dir=str(config_path),
        log_level=str(_setting(logging_section, 'level', 'WARNING')).upper(),
        log_file=log_file,
        log_max_size=log_max_size,
        log_backup_count=log_backup_count
    )
