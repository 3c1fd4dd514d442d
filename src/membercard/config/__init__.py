"""Configuration package for the member card client."""

from .settings import load_config
from .types import AppConfig, MemberCardApiConfig, StorageConfig
from .validation import validate_config

__all__ = ['AppConfig', 'MemberCardApiConfig', 'StorageConfig', 'load_config', 'validate_config']
