"""Tests for the base API implementation."""

from unittest.mock import MagicMock, Mock, patch

import pytest
import requests
from requests.exceptions import ConnectionError, RequestException, Timeout

from membercard.api.base_api import BaseAPI
from membercard.exceptions import APIError, APIResponseError, APITimeoutError

URL = "https://members.test.com/api/v1/members/42"


@pytest.fixture
def mock_session():
    """Create a mock requests session."""
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session


@pytest.fixture
def base_api(mock_session):
    """Create a BaseAPI instance for testing."""
    with patch('requests.Session', return_value=mock_session):
        return BaseAPI(headers={"Accept": "application/json"})


def ok_response():
    response = Mock(status_code=200, content=b'{"data": {}}')
    response.raise_for_status.return_value = None
    return response


def test_base_api_initialization(base_api):
    assert base_api.timeout is None
    assert base_api.session.headers == {"Accept": "application/json"}


def test_create_session_has_no_retries():
    """Test a failed attempt is never retried by the adapter."""
    session = BaseAPI()._create_session()
    assert session.adapters["https://"].max_retries.total == 0
    assert session.adapters["http://"].max_retries.total == 0


@pytest.mark.parametrize("status_code,response_text,expected_error", [
    (400, '{"error": "Bad Request"}', "Request failed: HTTP 400 (Code: invalid_response)"),
    (401, '{"message": "Unauthorized"}', "Request failed: HTTP 401 (Code: invalid_response)"),
    (500, "Internal Server Error", "Request failed: HTTP 500 (Code: invalid_response)")
])
def test_validate_response_errors(base_api, status_code, response_text, expected_error):
    """Test response validation with different error scenarios."""
    mock_response = Mock()
    mock_response.status_code = status_code
    mock_response.text = response_text
    mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError()
    
    with pytest.raises(APIResponseError) as exc_info:
        base_api._validate_response(mock_response)
    assert str(exc_info.value) == expected_error
    assert exc_info.value.response is mock_response


@pytest.mark.parametrize("exception_class,expected_error", [
    (Timeout, APITimeoutError),
    (ConnectionError, APIResponseError),
    (RequestException, APIResponseError),
    (Exception, APIError)
])
def test_send_error_handling(base_api, exception_class, expected_error):
    """Test transport errors are mapped to typed API errors."""
    base_api.session.request.side_effect = exception_class("Test error")
    with pytest.raises(expected_error):
        base_api._send("POST", URL, data={"zip": "60601"})


def test_send_non_2xx_raises(base_api):
    response = Mock(status_code=404, text="Not Found")
    response.raise_for_status.side_effect = requests.exceptions.HTTPError()
    base_api.session.request.return_value = response
    
    with pytest.raises(APIResponseError):
        base_api._send("POST", URL)


def test_send_returns_response(base_api):
    response = ok_response()
    base_api.session.request.return_value = response
    
    assert base_api._send("POST", URL, data={"zip": "60601"}) is response
    base_api.session.request.assert_called_once_with(
        method="POST",
        url=URL,
        params=None,
        json={"zip": "60601"},
        timeout=None
    )


def test_send_uses_client_timeout(mock_session):
    with patch('requests.Session', return_value=mock_session):
        api = BaseAPI(timeout=12.5)
    mock_session.request.return_value = ok_response()
    
    api._send("POST", URL)
    assert mock_session.request.call_args.kwargs["timeout"] == 12.5
    
    api._send("POST", URL, timeout=3)
    assert mock_session.request.call_args.kwargs["timeout"] == 3
