"""
Action System - Actions, reject reasons, and outcomes.

Actions represent the two player moves:
1. Match a playfield card against the stack top
2. Promote a reserve stack card to the top

A move either applies completely or is rejected with a reason code.
Rejections are ordinary outcomes, not exceptions.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .state import Zone


class ActionType(Enum):
    """Types of player actions."""
    MATCH = "match"
    PROMOTE = "promote"


class OutcomeKind(Enum):
    """What a selection ended up doing."""
    MATCH = "match"
    PROMOTE = "promote"
    REJECTED = "rejected"


class RejectReason(Enum):
    """Why a selection was turned into a no-op."""
    UNKNOWN_CARD = "unknown_card"  # id not in either zone
    WRONG_ZONE = "wrong_zone"  # e.g. promote on a playfield card
    NO_TOP_CARD = "no_top_card"  # stack is empty
    RANK_MISMATCH = "rank_mismatch"
    TOP_CARD_SELECTED = "top_card_selected"
    TOP_STILL_MATCHABLE = "top_still_matchable"


@dataclass(frozen=True)
class Action:
    """
    A player action to be applied to the game state.

    Actions are validated before application and applied atomically
    by the ActionProcessor.
    """
    action_type: ActionType
    card_id: int

    @classmethod
    def match(cls, card_id: int) -> Action:
        """Factory for match action."""
        return cls(action_type=ActionType.MATCH, card_id=card_id)

    @classmethod
    def promote(cls, card_id: int) -> Action:
        """Factory for promote action."""
        return cls(action_type=ActionType.PROMOTE, card_id=card_id)

    @classmethod
    def for_zone(cls, zone: Zone, card_id: int) -> Action:
        """The action a selection in this zone triggers."""
        if zone == Zone.PLAYFIELD:
            return cls.match(card_id)
        return cls.promote(card_id)


@dataclass(frozen=True)
class ActionOutcome:
    """
    Result of a selection.

    applied is True only when the table changed. Rejected outcomes carry
    a reason code and a human-readable message.
    """
    applied: bool
    kind: OutcomeKind
    card_id: int | None = None
    reason: RejectReason | None = None
    message: str = ""

    @classmethod
    def rejected(
        cls,
        reason: RejectReason,
        message: str,
        card_id: int | None = None,
    ) -> ActionOutcome:
        """Create a no-op outcome."""
        return cls(
            applied=False,
            kind=OutcomeKind.REJECTED,
            card_id=card_id,
            reason=reason,
            message=message,
        )

    @classmethod
    def applied_as(cls, action_type: ActionType, card_id: int, message: str = "") -> ActionOutcome:
        """Create a success outcome for an action type."""
        return cls(
            applied=True,
            kind=OutcomeKind(action_type.value),
            card_id=card_id,
            message=message,
        )
