"""Moderation value types."""

from __future__ import annotations

from dataclasses import dataclass

from wordguard.moderation.outcome import RemovalOutcome


@dataclass(frozen=True)
class InboundMessage:
    """The parts of a Telegram message the moderation flow reads."""

    text: str
    chat_id: int
    sender_id: int
    sender_name: str


@dataclass(frozen=True)
class ModerationResult:
    """What one webhook invocation did."""

    matched: bool
    outcome: RemovalOutcome | None = None
    notice_sent: bool = False
