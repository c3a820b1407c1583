"""Structured logging configuration."""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

import structlog

# Bot API URLs embed the token: https://api.telegram.org/bot<id>:<secret>/<method>
_BOT_TOKEN_RE = re.compile(r"bot\d+:[A-Za-z0-9_-]+")
_SECRET_KEYS = frozenset({"bot_token", "token", "webhook_secret", "secret_token"})

REDACTED = "[redacted]"


def redact_secrets(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor masking bot tokens and secret-named fields."""
    for key, value in event_dict.items():
        if key in _SECRET_KEYS and value:
            event_dict[key] = REDACTED
        elif isinstance(value, str) and "bot" in value:
            event_dict[key] = _BOT_TOKEN_RE.sub(f"bot{REDACTED}", value)
    return event_dict


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Route structlog and stdlib records (uvicorn, httpx) through one renderer."""
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        redact_secrets,
    ]

    if fmt == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=pre_chain,
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # One line per outbound Bot API call is noise; failures are logged by TelegramClient.
    for name in ("uvicorn.access", "httpcore", "httpx"):
        logging.getLogger(name).setLevel(logging.WARNING)
