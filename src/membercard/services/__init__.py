"""
Services package for the member card client.
"""

from .member_card_parser import TIER_RULES, classify_tier, parse_member_card
from .member_service import MemberCardListener, MemberCardService, ValidationResult
from .session_store import MemberSessionStore

__all__ = [
    'TIER_RULES',
    'MemberCardListener',
    'MemberCardService',
    'MemberSessionStore',
    'ValidationResult',
    'classify_tier',
    'parse_member_card',
]
