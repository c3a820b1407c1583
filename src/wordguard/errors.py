"""Exception types raised by WordGuard."""

from __future__ import annotations


class WordGuardError(Exception):
    """Base class for all WordGuard errors."""


class DecodeError(WordGuardError):
    """An inbound webhook payload could not be decoded into a message."""


class TransportError(WordGuardError):
    """An outbound Bot API call failed before a valid envelope was read."""

    def __init__(self, method: str, message: str) -> None:
        super().__init__(f"{method}: {message}")
        self.method = method


class ActionError(WordGuardError):
    """The Bot API answered with ``ok: false``.

    ``message`` is the envelope ``description`` verbatim; outcome
    classification compares it by exact string equality.
    """

    def __init__(
        self,
        code: int,
        message: str,
        *,
        migrate_to_chat_id: int = 0,
        retry_after: int = 0,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.migrate_to_chat_id = migrate_to_chat_id
        self.retry_after = retry_after

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ActionError(code={self.code!r}, message={self.message!r})"
