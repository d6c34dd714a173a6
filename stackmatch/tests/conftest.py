"""
Pytest fixtures for Stackmatch tests.
"""

import pytest

from ..engine_core.state import GameState, Suit, Zone
from ..engine_core.reducer import ActionProcessor
from ..layout import LayoutEntry, deal
from ..session import Session, SessionManager


def table_ids(state: GameState) -> tuple[list[int], list[int]]:
    """(sorted playfield ids, ordered stack ids)."""
    return (
        sorted(c.card_id for c in state.playfield),
        [c.card_id for c in state.stack],
    )


@pytest.fixture
def processor() -> ActionProcessor:
    return ActionProcessor()


@pytest.fixture
def empty_state() -> GameState:
    return GameState()


@pytest.fixture
def promote_layout() -> list[LayoutEntry]:
    """
    Queen alone in the playfield; stack 3, A, 4 with the 4 on top.

    The 4 cannot match the Queen, so reserves may be promoted.
    """
    return [
        LayoutEntry(12, Suit.CLUBS, Zone.PLAYFIELD, (250.0, 1000.0)),
        LayoutEntry(3, Suit.CLUBS, Zone.STACK, (200.0, 290.0)),
        LayoutEntry(1, Suit.HEARTS, Zone.STACK, (200.0, 290.0)),
        LayoutEntry(4, Suit.CLUBS, Zone.STACK, (800.0, 290.0)),
    ]


@pytest.fixture
def match_layout() -> list[LayoutEntry]:
    """A 2 in the playfield against an Ace on top of the stack."""
    return [
        LayoutEntry(2, Suit.CLUBS, Zone.PLAYFIELD, (300.0, 800.0)),
        LayoutEntry(1, Suit.HEARTS, Zone.STACK, (200.0, 290.0)),
    ]


@pytest.fixture
def promote_state(promote_layout) -> GameState:
    state = GameState()
    deal(state, promote_layout)
    return state


@pytest.fixture
def match_state(match_layout) -> GameState:
    state = GameState()
    deal(state, match_layout)
    return state


@pytest.fixture
def session() -> Session:
    """Session dealt with the default demonstration layout."""
    s = Session()
    s.start_new_game()
    return s


@pytest.fixture
def session_manager() -> SessionManager:
    return SessionManager()
