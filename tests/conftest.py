"""Pytest configuration and shared fixtures."""

import json
from concurrent.futures import Future
from unittest.mock import Mock

import pytest

from membercard.api.member_api import MemberCardAPI
from membercard.services.member_service import MemberCardService
from membercard.services.session_store import MemberSessionStore
from membercard.storage.key_value import InMemoryKeyValueStore


class ImmediateExecutor:
    """Executor running submitted work on the calling thread."""

    def submit(self, fn, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future

    def shutdown(self, wait=True):
        pass


def make_payload(
    card_id=42,
    item_name="Life Membership",
    valid_until="2030-01-01T00:00:00Z",
    members=(("Ada", "Lovelace"),)
):
    """Build a membership service response payload."""
    return {
        "data": {
            "id": card_id,
            "item_name": item_name,
            "valid_until": valid_until,
            "members": [
                {"first_name": first, "last_name": last}
                for first, last in members
            ]
        }
    }


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch, tmp_path):
    """Isolate tests from MEMBERCARD_* variables on the host."""
    for name in (
        "MEMBERCARD_CONFIG_DIR",
        "MEMBERCARD_REQUEST_URL",
        "MEMBERCARD_BEARER_TOKEN",
        "MEMBERCARD_TIMEOUT",
        "MEMBERCARD_STORAGE_BACKEND",
        "MEMBERCARD_STORAGE_PATH",
        "MEMBERCARD_LOG_LEVEL",
        "MEMBERCARD_LOG_FILE",
        "MEMBERCARD_LOG_MAX_SIZE",
        "MEMBERCARD_LOG_BACKUP_COUNT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture
def payload():
    """Single member Life Membership payload."""
    return make_payload()


@pytest.fixture
def payload_bytes(payload):
    return json.dumps(payload).encode("utf-8")


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def session_store(store):
    return MemberSessionStore(store)


@pytest.fixture
def api():
    """Mock membership API client."""
    return Mock(spec=MemberCardAPI)


@pytest.fixture
def listener():
    listener = Mock()
    listener.on_member_card_loaded = Mock()
    listener.on_member_card_load_failed = Mock()
    return listener


@pytest.fixture
def service(api, session_store, listener):
    """Service running validations synchronously."""
    return MemberCardService(
        api=api,
        session_store=session_store,
        listener=listener,
        executor=ImmediateExecutor()
    )


@pytest.fixture
def payload_factory():
    """Factory building response payloads with overridable fields."""
    return make_payload


@pytest.fixture
def immediate_executor():
    return ImmediateExecutor()
