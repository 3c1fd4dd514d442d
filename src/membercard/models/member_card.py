"""
Member card models.

``MembershipRecord`` is the in-memory result of a successful validation.
``SavedMemberInfo`` is the persisted subset needed to restore a session.
``MemberCardResponse`` and friends mirror the membership service payload.
"""

from dataclasses import dataclass
from datetime import datetime
from datetime import timedelta
from typing import Any


def parse_iso_datetime(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z`` for UTC.

    Raises:
        ValueError: If the value is not an ISO-8601 string
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected ISO-8601 string, got {type(value).__name__}")
    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    return datetime.fromisoformat(text)

def format_iso_datetime(value: datetime) -> str:
    """Render a timestamp as ISO-8601, using ``Z`` for UTC."""
    if value.utcoffset() == timedelta(0):
        return value.replace(tzinfo=None).isoformat() + 'Z'
    return value.isoformat()

def _require(data: dict[str, Any], key: str, expected: type) -> Any:
    """Fetch a required key and check its type."""
    if key not in data:
        raise KeyError(key)
    value = data[key]
    # bool is an int subclass and never a valid id
    if isinstance(value, bool) and expected is not bool:
        raise TypeError(f"Field {key} must be {expected.__name__}, got bool")
    if not isinstance(value, expected):
        raise TypeError(f"Field {key} must be {expected.__name__}, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Member:
    """One named person on a membership card."""
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def from_dict(cls, data: Any) -> "Member":
        if not isinstance(data, dict):
            raise TypeError(f"Member entry must be an object, got {type(data).__name__}")
        return cls(
            first_name=_require(data, 'first_name', str),
            last_name=_require(data, 'last_name', str)
        )

    def to_dict(self) -> dict[str, str]:
        return {'first_name': self.first_name, 'last_name': self.last_name}


@dataclass(frozen=True)
class MemberData:
    """The ``data`` object of a membership service response."""
    id: int
    item_name: str
    valid_until: datetime
    members: tuple[Member, ...]

    @classmethod
    def from_dict(cls, data: Any) -> "MemberData":
        if not isinstance(data, dict):
            raise TypeError(f"data must be an object, got {type(data).__name__}")
        members = _require(data, 'members', list)
        return cls(
            id=_require(data, 'id', int),
            item_name=_require(data, 'item_name', str),
            valid_until=parse_iso_datetime(_require(data, 'valid_until', str)),
            members=tuple(Member.from_dict(member) for member in members)
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'item_name': self.item_name,
            'valid_until': format_iso_datetime(self.valid_until),
            'members': [member.to_dict() for member in self.members]
        }


@dataclass(frozen=True)
class MemberCardResponse:
    """Top-level membership service response."""
    data: MemberData

    @classmethod
    def from_dict(cls, payload: Any) -> "MemberCardResponse":
        """Build a response from decoded JSON.

        Raises:
            KeyError: If a required field is missing
            TypeError: If a field has the wrong type
            ValueError: If ``valid_until`` is not ISO-8601
        """
        if not isinstance(payload, dict):
            raise TypeError(f"Response must be an object, got {type(payload).__name__}")
        if 'data' not in payload:
            raise KeyError('data')
        return cls(data=MemberData.from_dict(payload['data']))

    def to_dict(self) -> dict[str, Any]:
        return {'data': self.data.to_dict()}


@dataclass(frozen=True)
class MembershipRecord:
    """Validated membership card.

    Replaced wholesale on every successful validation. ``member_names`` keeps
    the service order since the selected name index points into it.
    """
    card_id: str
    member_names: tuple[str, ...]
    member_level: str
    member_zip: str
    expiration_date: datetime
    is_reciprocal_member: bool = False
    is_life_membership: bool = False

    def name_at(self, index: int) -> str | None:
        """Return the full name at ``index`` or None when out of range."""
        if 0 <= index < len(self.member_names):
            return self.member_names[index]
        return None

    @property
    def is_expired(self) -> bool:
        now = datetime.now(self.expiration_date.tzinfo)
        return self.expiration_date < now


@dataclass(frozen=True)
class SavedMemberInfo:
    """Persisted identity used to restore a member session."""
    member_id: str
    member_zip: str
