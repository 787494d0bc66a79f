"""Substring keyword scoring."""

from typing import Iterable


def score(text: str, keywords: Iterable[str]) -> int:
    """Count keywords occurring in ``text`` as case-insensitive substrings.

    No stemming and no word boundaries: "hurt" matches "hurting".
    """
    lowered = text.lower()
    return sum(1 for keyword in keywords if keyword.lower() in lowered)


def matches_any(text: str, keywords: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)
