"""
Game State - Cards and the two zones they live in.

Design principles:
- Single owner: one Session mutates one GameState
- Identity by card_id: ids are allocated here and never reused
- Zone exclusive: a card is in the playfield or the stack, never both
- Position is opaque: stored for undo, never interpreted
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any
from enum import Enum


MIN_RANK = 1
MAX_RANK = 13

RANK_LABELS = {1: "A", 11: "J", 12: "Q", 13: "K"}

Position = tuple[float, float]


class Suit(Enum):
    """Card suits. Irrelevant to matching, kept for display and undo."""
    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    HEARTS = "hearts"
    SPADES = "spades"

    @property
    def symbol(self) -> str:
        return {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }[self]


class Zone(Enum):
    """The two zones a card can belong to."""
    PLAYFIELD = "playfield"
    STACK = "stack"


def rank_label(rank: int) -> str:
    """Short label for a rank: A, 2..10, J, Q, K."""
    return RANK_LABELS.get(rank, str(rank))


@dataclass
class Card:
    """
    A card instance on the table.

    card_id, rank and suit never change once the card is created.
    face_up and position are presentation attributes the model keeps
    so undo can restore them.
    """
    card_id: int
    rank: int
    suit: Suit
    face_up: bool = True
    position: Position = (0.0, 0.0)

    def __hash__(self):
        return hash(self.card_id)

    def __eq__(self, other):
        if not isinstance(other, Card):
            return False
        return self.card_id == other.card_id

    @property
    def label(self) -> str:
        return f"{rank_label(self.rank)}{self.suit.symbol}"

    def copy(self) -> Card:
        return replace(self)


@dataclass
class GameState:
    """
    Complete table state at a point in time.

    playfield order carries no meaning; stack order does, with the last
    element being the top card. All changes go through the ActionProcessor.
    """
    playfield: list[Card] = field(default_factory=list)
    stack: list[Card] = field(default_factory=list)
    next_card_id: int = 0

    # =========================================================================
    # Identity
    # =========================================================================

    def next_id(self) -> int:
        """Allocate a fresh card id."""
        card_id = self.next_card_id
        self.next_card_id += 1
        return card_id

    # =========================================================================
    # Zone membership
    # =========================================================================

    def add_to_playfield(self, card: Card) -> None:
        self.playfield.append(card)

    def add_to_stack(self, card: Card) -> None:
        """Append to the stack; the card becomes the new top."""
        self.stack.append(card)

    def insert_into_playfield(self, card: Card, index: int) -> None:
        """Insert at index, appending when index is past the end."""
        _insert_clamped(self.playfield, card, index)

    def insert_into_stack(self, card: Card, index: int) -> None:
        """Insert at index, appending when index is past the end."""
        _insert_clamped(self.stack, card, index)

    def remove_from_playfield(self, card_id: int) -> Card | None:
        """Remove the card with this id. Absent ids are a no-op."""
        removed, self.playfield = _remove_by_id(self.playfield, card_id)
        return removed

    def remove_from_stack(self, card_id: int) -> Card | None:
        """Remove the card with this id. Absent ids are a no-op."""
        removed, self.stack = _remove_by_id(self.stack, card_id)
        return removed

    # =========================================================================
    # Lookup
    # =========================================================================

    def find_by_id(self, card_id: int) -> Card | None:
        """Find a card in either zone, playfield first."""
        for card in self.playfield:
            if card.card_id == card_id:
                return card
        for card in self.stack:
            if card.card_id == card_id:
                return card
        return None

    def zone_of(self, card_id: int) -> Zone | None:
        """Which zone holds this card, if any."""
        if self.playfield_index_of(card_id) is not None:
            return Zone.PLAYFIELD
        if self.stack_index_of(card_id) is not None:
            return Zone.STACK
        return None

    def playfield_index_of(self, card_id: int) -> int | None:
        return _index_of(self.playfield, card_id)

    def stack_index_of(self, card_id: int) -> int | None:
        return _index_of(self.stack, card_id)

    def top_of_stack(self) -> Card | None:
        """The active card, or None when the stack is empty."""
        return self.stack[-1] if self.stack else None

    @property
    def reserve_cards(self) -> list[Card]:
        """Stack cards below the top."""
        return list(self.stack[:-1])

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def clear(self) -> None:
        """Empty both zones and restart id allocation at zero."""
        self.playfield = []
        self.stack = []
        self.next_card_id = 0

    def snapshot(self) -> dict[str, Any]:
        """
        Observable summary of the table.

        Two states with equal snapshots look identical to a presentation
        layer: same playfield ids and positions, same stack order and top.
        """
        top = self.top_of_stack()
        return {
            "playfield": sorted(
                (c.card_id, c.rank, c.suit.value, c.position) for c in self.playfield
            ),
            "stack": [(c.card_id, c.rank, c.suit.value) for c in self.stack],
            "top": top.card_id if top else None,
        }


def _index_of(cards: list[Card], card_id: int) -> int | None:
    for i, card in enumerate(cards):
        if card.card_id == card_id:
            return i
    return None


def _remove_by_id(cards: list[Card], card_id: int) -> tuple[Card | None, list[Card]]:
    removed = None
    kept = []
    for card in cards:
        if card.card_id == card_id:
            removed = card
        else:
            kept.append(card)
    return removed, kept


def _insert_clamped(cards: list[Card], card: Card, index: int) -> None:
    if index < 0 or index >= len(cards):
        cards.append(card)
    else:
        cards.insert(index, card)
