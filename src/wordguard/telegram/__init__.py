"""Telegram Bot API access."""

from wordguard.telegram.client import TelegramClient
from wordguard.telegram.models import APIEnvelope, ResponseParameters

__all__ = [
    "APIEnvelope",
    "ResponseParameters",
    "TelegramClient",
]
