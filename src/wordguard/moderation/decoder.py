"""Telegram update decoding.

https://core.telegram.org/bots/api#update
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from wordguard.errors import DecodeError
from wordguard.moderation.models import InboundMessage


def decode_update(payload: bytes | str | Mapping[str, Any]) -> InboundMessage | None:
    """Extract an :class:`InboundMessage` from a raw webhook payload.

    Returns None for updates that carry no ``message`` (edits, member
    changes, callback queries); there is nothing to moderate in those.

    Missing ``text`` and ``from.first_name`` decode to empty strings; every
    other field except ``chat.id`` and ``from.id`` is ignored.
    """
    if isinstance(payload, (bytes, str)):
        try:
            update = json.loads(payload)
        except ValueError as exc:
            raise DecodeError(f"payload is not valid JSON: {exc}") from exc
    else:
        update = payload

    if not isinstance(update, Mapping):
        raise DecodeError("update must be a JSON object")

    if "message" not in update:
        return None
    message = update["message"]
    if not isinstance(message, Mapping):
        raise DecodeError("update.message must be an object")

    chat = message.get("chat")
    sender = message.get("from")
    if not isinstance(chat, Mapping):
        raise DecodeError("message has no chat")
    if not isinstance(sender, Mapping):
        raise DecodeError("message has no sender")

    text = message.get("text")
    first_name = sender.get("first_name")
    if text is not None and not isinstance(text, str):
        raise DecodeError("message.text must be a string")
    if first_name is not None and not isinstance(first_name, str):
        raise DecodeError("from.first_name must be a string")

    return InboundMessage(
        text=text or "",
        chat_id=_require_int(chat, "id", "chat.id"),
        sender_id=_require_int(sender, "id", "from.id"),
        sender_name=first_name or "",
    )


def _require_int(obj: Mapping[str, Any], key: str, label: str) -> int:
    value = obj.get(key)
    # bool is an int subclass
    if not isinstance(value, int) or isinstance(value, bool):
        raise DecodeError(f"{label} must be an integer")
    return value
