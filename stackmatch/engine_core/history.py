"""
Undo history.

Every applied action produces exactly one UndoRecord describing how to
reverse it. Records are kept in a LIFO so N applied actions can be
undone N times in strict reverse order.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass

from .action import ActionType
from .state import Position, Suit, Zone


@dataclass(frozen=True)
class UndoRecord:
    """
    Inverse of one applied action.

    For MATCH, target_card_id is the discarded top card and the
    discarded_* fields hold what is needed to resurrect it.
    For PROMOTE, target_card_id is the top card before promotion.
    """
    move_type: ActionType
    card_id: int
    card_rank: int
    card_suit: Suit
    original_zone: Zone
    original_index: int
    original_position: Position
    target_card_id: int

    # Match only
    discarded_rank: int | None = None
    discarded_suit: Suit | None = None
    discarded_position: Position | None = None


class UndoHistory:
    """
    LIFO of UndoRecords.

    max_depth bounds how many records are kept; when full, the oldest
    record is dropped. None means unbounded.
    """

    def __init__(self, max_depth: int | None = None):
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self._records: deque[UndoRecord] = deque(maxlen=max_depth)

    def __len__(self) -> int:
        return len(self._records)

    def push(self, record: UndoRecord) -> None:
        self._records.append(record)

    def can_undo(self) -> bool:
        return len(self._records) > 0

    def peek(self) -> UndoRecord | None:
        """Most recent record without removing it."""
        return self._records[-1] if self._records else None

    def undo(self) -> UndoRecord | None:
        """Pop the most recent record. None when there is nothing to undo."""
        if not self._records:
            return None
        return self._records.pop()

    def clear(self) -> None:
        self._records.clear()
