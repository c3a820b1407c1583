"""Forbidden word matching."""

from __future__ import annotations

from collections.abc import Iterable

FORBIDDEN_WORDS: frozenset[str] = frozenset({"aww"})


def contains_forbidden_word(text: str, words: Iterable[str] = FORBIDDEN_WORDS) -> bool:
    """Return True if ``text`` contains any of ``words``, ignoring case.

    Plain substring containment: "awwful" matches "aww".
    """
    lowered = text.lower()
    return any(word and word.lower() in lowered for word in words)
