"""Tests for logging setup and filters."""

import json
import logging

import pytest

from membercard.config.logging import ColoredFormatter
from membercard.config.logging import JsonFormatter
from membercard.config.logging import setup_logging
from membercard.config.logging_filters import MASK
from membercard.config.logging_filters import SensitiveDataFilter
from membercard.config.types import AppConfig
from membercard.config.types import MemberCardApiConfig


def make_record(msg, *args, **extra):
    record = logging.LogRecord("membercard.test", logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_filter_masks_bearer_token_in_message():
    record = make_record("Headers: {'Authorization': 'Bearer %s'}", "s3cr3t")
    
    assert SensitiveDataFilter().filter(record) is True
    assert "s3cr3t" not in record.getMessage()
    assert f"Bearer {MASK}" in record.getMessage()


def test_filter_masks_sensitive_fields():
    record = make_record("Request", extra_fields={
        "authorization": "Bearer abc",
        "member_id": "42",
        "nested": {"bearer_token": "abc", "note": "Bearer xyz"}
    })
    
    SensitiveDataFilter().filter(record)
    
    assert record.extra_fields == {
        "authorization": MASK,
        "member_id": "42",
        "nested": {"bearer_token": MASK, "note": f"Bearer {MASK}"}
    }


def test_filter_leaves_plain_messages():
    record = make_record("Member card %s loaded", "42")
    SensitiveDataFilter().filter(record)
    assert record.getMessage() == "Member card 42 loaded"


def test_json_formatter():
    record = make_record("Saved", extra_fields={"card_id": "42"})
    data = json.loads(JsonFormatter(include_timestamp=False).format(record))
    assert data == {"level": "INFO", "logger": "membercard.test", "message": "Saved", "card_id": "42"}


def test_colored_formatter_includes_level_and_context():
    record = make_record("Saved", extra_fields={"card_id": "42"})
    output = ColoredFormatter().format(record)
    assert "membercard.test - INFO - Saved" in output
    assert "card_id: 42" in output


def test_setup_logging_with_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "membercard.log"
    config = AppConfig(
        api=MemberCardApiConfig(request_url="", bearer_token=""),
        log_level="INFO",
        log_file=str(log_file)
    )
    
    setup_logging(config)
    logging.getLogger("membercard.test").info("Authorization: Bearer topsecret")
    for handler in restore_root_logger.handlers:
        handler.flush()
    
    assert restore_root_logger.level == logging.INFO
    assert len(restore_root_logger.handlers) == 2
    content = log_file.read_text(encoding="utf-8")
    assert "topsecret" not in content
    assert json.loads(content.splitlines()[-1])["message"] == f"Authorization: Bearer {MASK}"


def test_setup_logging_verbose_without_config(restore_root_logger):
    setup_logging(verbose=True)
    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
