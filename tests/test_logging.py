from __future__ import annotations

import json
import logging

import pytest
import structlog

from wordguard.logging import REDACTED, redact_secrets, setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_bot_token_in_url_is_redacted() -> None:
    event = {"event": "POST https://api.telegram.org/bot123456:AAH-x_9z/sendMessage failed"}

    out = redact_secrets(None, "warning", event)

    assert out["event"] == f"POST https://api.telegram.org/bot{REDACTED}/sendMessage failed"
    assert "AAH-x_9z" not in out["event"]


def test_secret_named_fields_are_masked() -> None:
    out = redact_secrets(
        None,
        "info",
        {"event": "config", "bot_token": "123:ABC", "webhook_secret": "s3cret", "chat_id": -100},
    )

    assert out["bot_token"] == REDACTED
    assert out["webhook_secret"] == REDACTED
    assert out["chat_id"] == -100


def test_empty_secret_and_plain_text_pass_through() -> None:
    out = redact_secrets(None, "info", {"event": "robot says aww", "bot_token": ""})

    assert out == {"event": "robot says aww", "bot_token": ""}


def test_stdlib_records_are_redacted_when_rendered(restore_logging, capsys) -> None:
    setup_logging("INFO", "json")

    logging.getLogger("httpx").warning("HTTP Request: POST https://api.telegram.org/bot42:SECRET/kickChatMember")
    structlog.get_logger("wordguard.test").info("telegram.request", bot_token="42:SECRET")

    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert len(lines) == 2
    assert lines[0]["event"] == f"HTTP Request: POST https://api.telegram.org/bot{REDACTED}/kickChatMember"
    assert lines[1]["bot_token"] == REDACTED
    assert "SECRET" not in json.dumps(lines)


def test_noisy_loggers_are_quieted(restore_logging) -> None:
    setup_logging("DEBUG", "console")

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
