"""
Models package for the member card client.
Contains the membership record and its wire representation.
"""

from .member_card import Member, MemberCardResponse, MemberData, MembershipRecord, SavedMemberInfo

__all__ = ['Member', 'MemberCardResponse', 'MemberData', 'MembershipRecord', 'SavedMemberInfo']
