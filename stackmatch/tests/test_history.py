"""
Tests for the undo history.
"""

import pytest

from ..engine_core.action import ActionType
from ..engine_core.history import UndoHistory, UndoRecord
from ..engine_core.state import Suit, Zone


def record(card_id: int) -> UndoRecord:
    return UndoRecord(
        move_type=ActionType.PROMOTE,
        card_id=card_id,
        card_rank=5,
        card_suit=Suit.CLUBS,
        original_zone=Zone.STACK,
        original_index=0,
        original_position=(0.0, 0.0),
        target_card_id=99,
    )


class TestUndoHistory:
    """Tests for push/undo ordering."""

    def test_empty_history(self):
        history = UndoHistory()
        assert not history.can_undo()
        assert history.undo() is None
        assert history.peek() is None
        assert len(history) == 0

    def test_lifo_order(self):
        history = UndoHistory()
        for i in range(3):
            history.push(record(i))

        assert [history.undo().card_id for _ in range(3)] == [2, 1, 0]
        assert history.undo() is None

    def test_peek_does_not_pop(self):
        history = UndoHistory()
        history.push(record(7))

        assert history.peek().card_id == 7
        assert len(history) == 1

    def test_clear(self):
        history = UndoHistory()
        history.push(record(1))
        history.push(record(2))
        history.clear()

        assert not history.can_undo()

    def test_max_depth_drops_oldest(self):
        history = UndoHistory(max_depth=2)
        for i in range(4):
            history.push(record(i))

        assert len(history) == 2
        assert history.undo().card_id == 3
        assert history.undo().card_id == 2
        assert not history.can_undo()

    def test_invalid_max_depth(self):
        with pytest.raises(ValueError):
            UndoHistory(max_depth=0)
