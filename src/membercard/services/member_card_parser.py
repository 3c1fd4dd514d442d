"""Member card response parsing and tier classification."""

import json
import logging
from dataclasses import dataclass
from typing import Any

from membercard.models.member_card import MemberCardResponse
from membercard.models.member_card import MembershipRecord


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TierRule:
    """Display name override and privilege flags for a raw tier name."""
    display_name: str | None = None
    is_life_membership: bool = False
    is_reciprocal_member: bool = False


_RECIPROCAL = TierRule(is_reciprocal_member=True)

# Exact, case-sensitive match on the service's item_name
TIER_RULES: dict[str, TierRule] = {
    "Life Membership": TierRule(display_name="Life Member", is_life_membership=True),
    "Premium Member": _RECIPROCAL,
    "Lionhearted Council": _RECIPROCAL,
    "Lionhearted Roundtable": _RECIPROCAL,
    "Lionhearted Circle": _RECIPROCAL,
    "Sustaining Fellow": _RECIPROCAL,
    "Sustaining Fellow Young": _RECIPROCAL,
    "Sustaining Fellow Bronze": _RECIPROCAL,
    "Sustaining Fellow Silver": _RECIPROCAL,
    "Sustaining Fellow Sterling": _RECIPROCAL,
    "Sustaining Fellow Gold": _RECIPROCAL,
    "Sustaining Fellow Platinum": _RECIPROCAL,
}

DEFAULT_TIER_RULE = TierRule()


def classify_tier(item_name: str) -> tuple[str, bool, bool]:
    """Classify a raw tier name.

    Args:
        item_name: Tier name as returned by the membership service

    Returns:
        Tuple of (member_level, is_life_membership, is_reciprocal_member)
    """
    rule = TIER_RULES.get(item_name, DEFAULT_TIER_RULE)
    member_level = rule.display_name if rule.display_name is not None else item_name
    return member_level, rule.is_life_membership, rule.is_reciprocal_member


def decode_member_card(raw: bytes | str) -> MemberCardResponse:
    """Decode a raw response body into the wire model.

    Raises:
        ValueError: If the body is not JSON or a date is malformed
        KeyError: If a required field is missing
        TypeError: If a field has the wrong type
    """
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode('utf-8')
    payload: Any = json.loads(raw)
    return MemberCardResponse.from_dict(payload)


def build_record(response: MemberCardResponse, zip_code: str) -> MembershipRecord:
    """Turn a decoded response into a classified membership record."""
    data = response.data
    member_level, is_life, is_reciprocal = classify_tier(data.item_name)
    
    return MembershipRecord(
        card_id=str(data.id),
        member_names=tuple(member.full_name for member in data.members),
        member_level=member_level,
        member_zip=zip_code,
        expiration_date=data.valid_until,
        is_reciprocal_member=is_reciprocal,
        is_life_membership=is_life
    )


def parse_member_card(raw: bytes | str | None, zip_code: str) -> MembershipRecord | None:
    """Parse a membership service response.

    Args:
        raw: Response body
        zip_code: Postal code the caller validated with

    Returns:
        Membership record, or None if the body does not match the schema
    """
    if raw is None:
        logger.warning("Member card response has no body")
        return None
    
    try:
        response = decode_member_card(raw)
    except (ValueError, KeyError, TypeError) as e:
        # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
        logger.warning(f"Failed to decode member card response: {type(e).__name__}: {e}")
        return None
    
    record = build_record(response, zip_code)
    if not record.member_names:
        logger.warning(f"Member card {record.card_id} has no member names")
    
    logger.debug(f"Parsed member card {record.card_id} with level {record.member_level}")
    return record
