"""
Match rules.

Two ranks match when they are exactly one apart. Suit plays no part and
there is no wrap-around between King and Ace.
"""

from __future__ import annotations
from typing import Iterable

from .state import Card


def can_match(rank_a: int, rank_b: int) -> bool:
    """True when the ranks differ by exactly one."""
    return abs(rank_a - rank_b) == 1


def find_match(rank: int, cards: Iterable[Card]) -> Card | None:
    """First card whose rank matches the given rank."""
    for card in cards:
        if can_match(card.rank, rank):
            return card
    return None


def has_any_match(rank: int, cards: Iterable[Card]) -> bool:
    return find_match(rank, cards) is not None
