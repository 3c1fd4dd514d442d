"""Tests for the membership service API client."""

from unittest.mock import MagicMock, Mock, patch

import pytest
import requests

from membercard.api.member_api import MemberCardAPI
from membercard.config.types import MemberCardApiConfig
from membercard.exceptions import APIResponseError, APITimeoutError

REQUEST_URL = "https://members.test.com/api/v1/members/{member_id}"


@pytest.fixture
def mock_session():
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session


@pytest.fixture
def member_api(mock_session):
    with patch('requests.Session', return_value=mock_session):
        return MemberCardAPI(REQUEST_URL, "test-token")


def test_headers_carry_bearer_token(member_api):
    assert member_api.session.headers == {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "Authorization": "Bearer test-token",
    }


@pytest.mark.parametrize("member_id,expected", [
    ("123", "https://members.test.com/api/v1/members/123"),
    ("A-77", "https://members.test.com/api/v1/members/A-77"),
    ("12/34", "https://members.test.com/api/v1/members/12%2F34"),
])
def test_member_url(member_api, member_id, expected):
    assert member_api.member_url(member_id) == expected


def test_lookup_member_posts_zip(member_api, payload_bytes):
    response = Mock(status_code=200, content=payload_bytes)
    response.raise_for_status.return_value = None
    member_api.session.request.return_value = response
    
    assert member_api.lookup_member("42", "60601") == payload_bytes
    member_api.session.request.assert_called_once_with(
        method="POST",
        url="https://members.test.com/api/v1/members/42",
        params=None,
        json={"zip": "60601"},
        timeout=None
    )


def test_lookup_member_http_error(member_api):
    response = Mock(status_code=401, text="Unauthorized")
    response.raise_for_status.side_effect = requests.exceptions.HTTPError()
    member_api.session.request.return_value = response
    
    with pytest.raises(APIResponseError):
        member_api.lookup_member("42", "60601")


def test_lookup_member_timeout(member_api):
    member_api.session.request.side_effect = requests.exceptions.Timeout("slow")
    with pytest.raises(APITimeoutError):
        member_api.lookup_member("42", "60601")


def test_from_config():
    api = MemberCardAPI.from_config(MemberCardApiConfig(
        request_url=REQUEST_URL,
        bearer_token="abc",
        timeout=12.5
    ))
    assert api.timeout == 12.5
    assert api.session.headers["Authorization"] == "Bearer abc"
    assert api.request_url == REQUEST_URL
