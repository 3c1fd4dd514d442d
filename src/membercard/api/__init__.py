"""
API package for the member card client.
"""

from .base_api import BaseAPI
from .member_api import MemberCardAPI

__all__ = ['BaseAPI', 'MemberCardAPI']
