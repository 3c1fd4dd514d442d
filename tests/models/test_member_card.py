"""Tests for member card models."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone

import pytest

from membercard.models.member_card import Member
from membercard.models.member_card import MembershipRecord
from membercard.models.member_card import format_iso_datetime
from membercard.models.member_card import parse_iso_datetime


def make_record(names=("Ada Lovelace", "Charles Babbage"), expires=None):
    return MembershipRecord(
        card_id="42",
        member_names=names,
        member_level="Life Member",
        member_zip="60601",
        expiration_date=expires or datetime(2030, 1, 1, tzinfo=timezone.utc),
        is_life_membership=True
    )


@pytest.mark.parametrize("index,expected", [
    (0, "Ada Lovelace"),
    (1, "Charles Babbage"),
    (2, None),
    (-1, None),
])
def test_name_at(index, expected):
    assert make_record().name_at(index) == expected


def test_record_is_immutable():
    record = make_record()
    with pytest.raises(FrozenInstanceError):
        record.is_reciprocal_member = True


def test_is_expired():
    now = datetime.now(timezone.utc)
    assert make_record(expires=now - timedelta(days=1)).is_expired is True
    assert make_record(expires=now + timedelta(days=1)).is_expired is False


def test_member_full_name():
    assert Member("Ada", "Lovelace").full_name == "Ada Lovelace"


@pytest.mark.parametrize("value,expected", [
    ("2030-01-01T00:00:00Z", datetime(2030, 1, 1, tzinfo=timezone.utc)),
    ("2030-01-01T00:00:00+00:00", datetime(2030, 1, 1, tzinfo=timezone.utc)),
    ("2030-01-01T05:00:00+05:00", datetime(2030, 1, 1, tzinfo=timezone.utc)),
    ("2030-01-01T00:00:00", datetime(2030, 1, 1)),
])
def test_parse_iso_datetime(value, expected):
    assert parse_iso_datetime(value) == expected


@pytest.mark.parametrize("value", ["", "01/01/2030", "2030-13-01T00:00:00Z", None, 20300101])
def test_parse_iso_datetime_rejects(value):
    with pytest.raises(ValueError):
        parse_iso_datetime(value)


def test_format_iso_datetime():
    assert format_iso_datetime(datetime(2030, 1, 1, tzinfo=timezone.utc)) == "2030-01-01T00:00:00Z"
    assert format_iso_datetime(datetime(2030, 1, 1)) == "2030-01-01T00:00:00"
