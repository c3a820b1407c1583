"""Classification of removal attempts and the notices they produce."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from wordguard.errors import ActionError


class RemovalOutcome(str, Enum):
    SUCCESS = "success"
    OWNER_PROTECTED = "owner_protected"
    INSUFFICIENT_PRIVILEGE = "insufficient_privilege"
    ADMIN_PROTECTED = "admin_protected"
    PRIVATE_CHAT_UNSUPPORTED = "private_chat_unsupported"
    UNKNOWN = "unknown"


# Bot API descriptions, compared verbatim. A reworded description from
# Telegram lands in UNKNOWN.
KNOWN_FAILURES: dict[str, RemovalOutcome] = {
    "Bad Request: can't remove chat owner": RemovalOutcome.OWNER_PROTECTED,
    "Bad Request: not enough rights to restrict/unrestrict chat member": (
        RemovalOutcome.INSUFFICIENT_PRIVILEGE
    ),
    "Bad Request: user is an administrator of the chat": RemovalOutcome.ADMIN_PROTECTED,
    "Bad Request: chat member status can't be changed in private chats": (
        RemovalOutcome.PRIVATE_CHAT_UNSUPPORTED
    ),
}

SUCCESS_NOTICE = "{name} have used a forbidden word and will be banned for a day from this group."

NOTICES: dict[RemovalOutcome, str] = {
    RemovalOutcome.OWNER_PROTECTED: "Group Owner's can use forbidden words!",
    RemovalOutcome.INSUFFICIENT_PRIVILEGE: (
        "Forbidden Word used but I don't have enough permissions to kick members. "
        "Please make me an admin."
    ),
    RemovalOutcome.ADMIN_PROTECTED: "Chat Admins can also use forbidden words!",
    RemovalOutcome.PRIVATE_CHAT_UNSUPPORTED: "Sorry, This doesn't work in private chats!",
}


@dataclass(frozen=True)
class ClassifiedRemoval:
    """A removal outcome. ``error`` is the original failure for UNKNOWN only."""

    outcome: RemovalOutcome
    error: BaseException | None = None


def classify_removal_error(error: BaseException) -> ClassifiedRemoval:
    """Map a failed removal to a known outcome, or UNKNOWN carrying ``error``."""
    if isinstance(error, ActionError):
        outcome = KNOWN_FAILURES.get(error.message)
        if outcome is not None:
            return ClassifiedRemoval(outcome)
    return ClassifiedRemoval(RemovalOutcome.UNKNOWN, error)


def notice_for(outcome: RemovalOutcome, sender_name: str) -> str | None:
    """Chat notice for ``outcome``; None when nothing should be posted."""
    if outcome is RemovalOutcome.SUCCESS:
        return SUCCESS_NOTICE.format(name=sender_name)
    return NOTICES.get(outcome)
