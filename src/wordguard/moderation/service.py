"""Forbidden word moderation flow."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import structlog

from wordguard.errors import DecodeError, WordGuardError
from wordguard.moderation.decoder import decode_update
from wordguard.moderation.filter import FORBIDDEN_WORDS, contains_forbidden_word
from wordguard.moderation.models import InboundMessage, ModerationResult
from wordguard.moderation.outcome import (
    ClassifiedRemoval,
    RemovalOutcome,
    classify_removal_error,
    notice_for,
)
from wordguard.telemetry import TelemetrySink

logger = structlog.get_logger()

ONE_DAY_S = 86_400


class ModerationService:
    """Bans senders of forbidden words and tells the chat what happened.

    One call makes at most two Bot API requests, in order: the removal, then
    the notice. Nothing is retried; failures that produce no notice go to
    the telemetry sink.
    """

    def __init__(
        self,
        *,
        client,
        telemetry: TelemetrySink,
        forbidden_words: Iterable[str] = FORBIDDEN_WORDS,
        ban_duration_s: int = ONE_DAY_S,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.client = client
        self.telemetry = telemetry
        self.forbidden_words = frozenset(word.lower() for word in forbidden_words if word)
        self.ban_duration_s = ban_duration_s
        self.clock = clock

    async def handle_update(self, payload: bytes | str | Mapping[str, Any]) -> ModerationResult | None:
        """Decode a raw webhook payload and moderate it. None if undecodable."""
        try:
            message = decode_update(payload)
        except DecodeError as exc:
            self.telemetry.report(exc, stage="decode")
            return None
        if message is None:
            return ModerationResult(matched=False)
        return await self.handle_message(message)

    async def handle_message(self, message: InboundMessage) -> ModerationResult:
        if not contains_forbidden_word(message.text, self.forbidden_words):
            return ModerationResult(matched=False)

        removal = await self._remove(message)
        logger.info(
            "moderation.removal",
            chat_id=message.chat_id,
            sender_id=message.sender_id,
            outcome=removal.outcome.value,
        )

        if removal.outcome is RemovalOutcome.UNKNOWN:
            self.telemetry.report(
                removal.error,
                stage="remove_member",
                chat_id=message.chat_id,
                sender_id=message.sender_id,
            )
            return ModerationResult(matched=True, outcome=removal.outcome)

        notice = notice_for(removal.outcome, message.sender_name)
        sent = await self._notify(message.chat_id, notice) if notice else False
        return ModerationResult(matched=True, outcome=removal.outcome, notice_sent=sent)

    async def _remove(self, message: InboundMessage) -> ClassifiedRemoval:
        until_date = int(self.clock()) + self.ban_duration_s
        try:
            await self.client.remove_member(message.chat_id, message.sender_id, until_date)
        except WordGuardError as exc:
            return classify_removal_error(exc)
        return ClassifiedRemoval(RemovalOutcome.SUCCESS)

    async def _notify(self, chat_id: int, text: str) -> bool:
        try:
            await self.client.send_message(chat_id, text)
        except WordGuardError as exc:
            self.telemetry.report(exc, stage="send_message", chat_id=chat_id)
            return False
        return True
