"""Configuration type definitions."""

from dataclasses import dataclass, field
from typing import Optional, TypedDict, Union


class ApiSection(TypedDict):
    """Member card API section as read from YAML or environment."""
    request_url: str
    bearer_token: str
    timeout: Optional[float]

class StorageSection(TypedDict):
    """Session storage section as read from YAML or environment."""
    backend: str
    path: Optional[str]

class LoggingSection(TypedDict):
    """Logging section as read from YAML or environment."""
    level: str
    file: Optional[str]
    max_size: Union[int, str]  # in MB
    backup_count: Union[int, str]

class GlobalConfig(TypedDict):
    """Global configuration structure."""
    api: ApiSection
    storage: StorageSection
    logging: LoggingSection

@dataclass
class MemberCardApiConfig:
    """Membership endpoint settings."""
    request_url: str
    bearer_token: str
    timeout: Optional[float] = None

@dataclass
class StorageConfig:
    """Where the saved member session lives."""
    backend: str = 'json'
    path: Optional[str] = None

@dataclass
class AppConfig:
    """Application configuration."""
    api: MemberCardApiConfig
    storage: StorageConfig = field(default_factory=StorageConfig)
    config_dir: str = ''
    log_level: str = 'WARNING'
    log_file: Optional[str] = None
    log_max_size: int = 10
    log_backup_count: int = 5
