"""Forbidden word moderation."""

from wordguard.moderation.decoder import decode_update
from wordguard.moderation.filter import FORBIDDEN_WORDS, contains_forbidden_word
from wordguard.moderation.models import InboundMessage, ModerationResult
from wordguard.moderation.outcome import (
    ClassifiedRemoval,
    RemovalOutcome,
    classify_removal_error,
    notice_for,
)
from wordguard.moderation.service import ModerationService

__all__ = [
    "FORBIDDEN_WORDS",
    "ClassifiedRemoval",
    "InboundMessage",
    "ModerationResult",
    "ModerationService",
    "RemovalOutcome",
    "classify_removal_error",
    "contains_forbidden_word",
    "decode_update",
    "notice_for",
]
