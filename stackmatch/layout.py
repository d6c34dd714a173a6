"""
Initial Layouts - Describes and deals the opening table.

A layout is an ordered list of LayoutEntry values. Dealing walks the list
in order, allocating card ids from the state as it goes, so the first
entry always gets id 0. The engine never shuffles: callers supply the
layout (the fixed demonstration deal below, tests, or JSON from a client).
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Iterable

from .engine_core.state import GameState, Card, Suit, Zone, MIN_RANK, MAX_RANK, Position


class LayoutError(ValueError):
    """Raised when a layout cannot be dealt."""


@dataclass(frozen=True)
class LayoutEntry:
    """One card of the opening table."""
    rank: int
    suit: Suit
    zone: Zone
    position: Position = (0.0, 0.0)


def default_layout() -> list[LayoutEntry]:
    """
    The fixed demonstration deal.

    Six playfield cards in two staggered columns, three stack cards with
    the 4 of clubs on top.
    """
    return [
        LayoutEntry(12, Suit.CLUBS, Zone.PLAYFIELD, (250.0, 1000.0)),
        LayoutEntry(2, Suit.CLUBS, Zone.PLAYFIELD, (300.0, 800.0)),
        LayoutEntry(2, Suit.DIAMONDS, Zone.PLAYFIELD, (350.0, 600.0)),
        LayoutEntry(2, Suit.CLUBS, Zone.PLAYFIELD, (850.0, 1000.0)),
        LayoutEntry(2, Suit.CLUBS, Zone.PLAYFIELD, (800.0, 800.0)),
        LayoutEntry(1, Suit.SPADES, Zone.PLAYFIELD, (750.0, 600.0)),
        LayoutEntry(3, Suit.CLUBS, Zone.STACK, (200.0, 290.0)),
        LayoutEntry(1, Suit.HEARTS, Zone.STACK, (200.0, 290.0)),
        LayoutEntry(4, Suit.CLUBS, Zone.STACK, (800.0, 290.0)),
    ]


def validate_layout(layout: Iterable[LayoutEntry]) -> list[LayoutEntry]:
    """
    Check every entry of a layout.

    Returns the entries as a list with float positions, ready for deal().
    Raises LayoutError on the first bad entry.
    """
    entries = []
    for i, entry in enumerate(layout):
        if isinstance(entry.rank, bool) or not isinstance(entry.rank, int) \
                or not MIN_RANK <= entry.rank <= MAX_RANK:
            raise LayoutError(f"Entry {i}: rank must be {MIN_RANK}-{MAX_RANK}, got {entry.rank!r}")
        if not isinstance(entry.suit, Suit):
            raise LayoutError(f"Entry {i}: unknown suit {entry.suit!r}")
        if not isinstance(entry.zone, Zone):
            raise LayoutError(f"Entry {i}: unknown zone {entry.zone!r}")
        entries.append(replace(entry, position=_checked_position(i, entry.position)))
    return entries


def _checked_position(i: int, position: Any) -> Position:
    try:
        x, y = position
    except (TypeError, ValueError) as e:
        raise LayoutError(f"Entry {i}: position must be an (x, y) pair") from e
    for v in (x, y):
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise LayoutError(f"Entry {i}: position must be numeric, got {position!r}")
    return (float(x), float(y))


def deal(state: GameState, layout: Iterable[LayoutEntry]) -> None:
    """Place every entry of a validated layout on the table, in order."""
    for entry in layout:
        card = Card(
            card_id=state.next_id(),
            rank=entry.rank,
            suit=entry.suit,
            face_up=True,
            position=entry.position,
        )
        if entry.zone == Zone.PLAYFIELD:
            state.add_to_playfield(card)
        else:
            state.add_to_stack(card)


def layout_from_dicts(data: list[dict[str, Any]]) -> list[LayoutEntry]:
    """
    Parse JSON-style layout entries.

    Each entry looks like
    {"rank": 12, "suit": "clubs", "zone": "playfield", "position": [250, 1000]}.
    Suit and zone names are case-insensitive; position is optional.
    """
    entries = []
    for i, item in enumerate(data):
        try:
            rank = item["rank"]
            suit = Suit(str(item["suit"]).lower())
            zone = Zone(str(item["zone"]).lower())
        except KeyError as e:
            raise LayoutError(f"Entry {i}: missing field {e}") from e
        except ValueError as e:
            raise LayoutError(f"Entry {i}: {e}") from e

        position = item.get("position") or (0.0, 0.0)
        try:
            x, y = (float(v) for v in position)
        except (TypeError, ValueError) as e:
            raise LayoutError(f"Entry {i}: position must be an (x, y) pair") from e
        entries.append(LayoutEntry(rank=rank, suit=suit, zone=zone, position=(x, y)))
    return validate_layout(entries)
