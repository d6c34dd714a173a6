"""
Engine Core - Game state management, rules, and undo.

The engine is the runtime that:
1. Holds the GameState (playfield + stack)
2. Decides whether two ranks match
3. Applies Match and Promote via the ActionProcessor
4. Records an UndoRecord for every applied action
"""

from .state import GameState, Card, Suit, Zone, MIN_RANK, MAX_RANK, rank_label
from .action import Action, ActionType, ActionOutcome, OutcomeKind, RejectReason
from .rules import can_match, find_match, has_any_match
from .history import UndoHistory, UndoRecord
from .reducer import ActionProcessor

__all__ = [
    "GameState",
    "Card",
    "Suit",
    "Zone",
    "MIN_RANK",
    "MAX_RANK",
    "rank_label",
    "Action",
    "ActionType",
    "ActionOutcome",
    "OutcomeKind",
    "RejectReason",
    "can_match",
    "find_match",
    "has_any_match",
    "UndoHistory",
    "UndoRecord",
    "ActionProcessor",
]
