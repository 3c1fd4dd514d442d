"""
Member card validation client.
"""

__version__ = '0.1.0'

from .exceptions import (
    APIError,
    APIResponseError,
    APITimeoutError,
    ConfigError,
    MemberCardError,
    StorageError,
)
from .models.member_card import MembershipRecord, SavedMemberInfo
from .services.member_service import MemberCardListener, MemberCardService, ValidationResult

__all__ = [
    'APIError',
    'APIResponseError',
    'APITimeoutError',
    'ConfigError',
    'MemberCardError',
    'MemberCardListener',
    'MemberCardService',
    'MembershipRecord',
    'SavedMemberInfo',
    'StorageError',
    'ValidationResult',
]
