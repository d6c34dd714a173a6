"""
Reducer - Applies and reverts actions on the game state.

The ActionProcessor is the single point of table mutation.
All moves and undos go through apply() and revert().

Design principles:
- Validates fully before mutating: a rejected move leaves no trace
- Every applied move yields exactly one UndoRecord
- Rejections are outcomes with reason codes, never exceptions
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from ..config import DEFAULT_STACK_TOP_POSITION
from .state import GameState, Card, Zone, Position
from .action import Action, ActionType, ActionOutcome, RejectReason
from .history import UndoRecord
from .rules import can_match, find_match


logger = logging.getLogger(__name__)


@dataclass
class ActionProcessor:
    """
    Applies Match and Promote actions to a GameState.

    Stateless apart from configuration - all table state is in GameState.
    """
    stack_top_position: Position = DEFAULT_STACK_TOP_POSITION

    def apply(
        self, state: GameState, action: Action
    ) -> tuple[ActionOutcome, UndoRecord | None]:
        """
        Apply an action to the game state.

        Returns the outcome and, when the action applied, the record
        that reverses it.
        """
        rejection = self._validate_action(state, action)
        if rejection:
            logger.debug(
                "Rejected %s of card %d: %s",
                action.action_type.value, action.card_id, rejection.message,
            )
            return rejection, None

        handler = self._get_handler(action.action_type)
        return handler(state, action)

    def _validate_action(self, state: GameState, action: Action) -> ActionOutcome | None:
        """
        Check an action against the current state.

        Returns a rejected outcome if invalid, None if valid.
        """
        card_id = action.card_id
        card = state.find_by_id(card_id)
        if card is None:
            return ActionOutcome.rejected(
                RejectReason.UNKNOWN_CARD, f"Card {card_id} is not on the table", card_id
            )

        zone = state.zone_of(card_id)
        top = state.top_of_stack()

        if action.action_type == ActionType.MATCH:
            if zone != Zone.PLAYFIELD:
                return ActionOutcome.rejected(
                    RejectReason.WRONG_ZONE, f"Card {card_id} is not in the playfield", card_id
                )
            if top is None:
                return ActionOutcome.rejected(
                    RejectReason.NO_TOP_CARD, "Stack is empty - nothing to match against", card_id
                )
            if not can_match(card.rank, top.rank):
                return ActionOutcome.rejected(
                    RejectReason.RANK_MISMATCH,
                    f"{card.label} does not match top card {top.label}",
                    card_id,
                )
            return None

        # Promote
        if zone != Zone.STACK:
            return ActionOutcome.rejected(
                RejectReason.WRONG_ZONE, f"Card {card_id} is not in the stack", card_id
            )
        if top is None:
            return ActionOutcome.rejected(
                RejectReason.NO_TOP_CARD, "Stack is empty - nothing to replace", card_id
            )
        if top.card_id == card_id:
            return ActionOutcome.rejected(
                RejectReason.TOP_CARD_SELECTED, f"{card.label} is already the top card", card_id
            )
        playable = find_match(top.rank, state.playfield)
        if playable is not None:
            return ActionOutcome.rejected(
                RejectReason.TOP_STILL_MATCHABLE,
                f"Top card {top.label} can still be matched by {playable.label}",
                card_id,
            )
        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.MATCH: self._handle_match,
            ActionType.PROMOTE: self._handle_promote,
        }
        return handlers[action_type]

    def _handle_match(
        self, state: GameState, action: Action
    ) -> tuple[ActionOutcome, UndoRecord]:
        """
        Move a playfield card onto the stack as the new top.

        The old top is discarded and enters no zone. Undo rebuilds it
        from the record.
        """
        card = state.find_by_id(action.card_id)
        old_top = state.top_of_stack()

        record = UndoRecord(
            move_type=ActionType.MATCH,
            card_id=card.card_id,
            card_rank=card.rank,
            card_suit=card.suit,
            original_zone=Zone.PLAYFIELD,
            original_index=state.playfield_index_of(card.card_id),
            original_position=card.position,
            target_card_id=old_top.card_id,
            discarded_rank=old_top.rank,
            discarded_suit=old_top.suit,
            discarded_position=old_top.position,
        )

        state.remove_from_playfield(card.card_id)
        state.remove_from_stack(old_top.card_id)
        card.position = self.stack_top_position
        state.add_to_stack(card)

        logger.info("Matched %s onto %s (discarded)", card.label, old_top.label)
        return (
            ActionOutcome.applied_as(
                ActionType.MATCH, card.card_id, f"{card.label} matched {old_top.label}"
            ),
            record,
        )

    def _handle_promote(
        self, state: GameState, action: Action
    ) -> tuple[ActionOutcome, UndoRecord]:
        """Move a reserve card to the top of the stack."""
        card = state.find_by_id(action.card_id)
        old_top = state.top_of_stack()

        record = UndoRecord(
            move_type=ActionType.PROMOTE,
            card_id=card.card_id,
            card_rank=card.rank,
            card_suit=card.suit,
            original_zone=Zone.STACK,
            original_index=state.stack_index_of(card.card_id),
            original_position=card.position,
            target_card_id=old_top.card_id,
        )

        state.remove_from_stack(card.card_id)
        state.add_to_stack(card)

        logger.info("Promoted %s over %s", card.label, old_top.label)
        return (
            ActionOutcome.applied_as(
                ActionType.PROMOTE, card.card_id, f"{card.label} replaced {old_top.label}"
            ),
            record,
        )

    # =========================================================================
    # Undo
    # =========================================================================

    def can_revert(self, state: GameState, record: UndoRecord) -> bool:
        """Whether the record still describes the current table."""
        if record.move_type == ActionType.MATCH:
            top = state.top_of_stack()
            return (
                top is not None
                and top.card_id == record.card_id
                and state.zone_of(record.target_card_id) is None
            )
        if record.move_type == ActionType.PROMOTE:
            return state.stack_index_of(record.card_id) is not None
        return False

    def revert(self, state: GameState, record: UndoRecord) -> bool:
        """
        Reverse one applied action.

        Returns False, leaving the state untouched, if the record no
        longer fits the table.
        """
        if not self.can_revert(state, record):
            logger.warning(
                "Undo record for %s of card %d does not fit the table",
                record.move_type.value, record.card_id,
            )
            return False

        if record.move_type == ActionType.MATCH:
            self._revert_match(state, record)
        else:
            self._revert_promote(state, record)
        return True

    def _revert_match(self, state: GameState, record: UndoRecord) -> None:
        moved = state.remove_from_stack(record.card_id)
        restored = Card(
            card_id=record.card_id,
            rank=record.card_rank,
            suit=record.card_suit,
            face_up=moved.face_up,
            position=record.original_position,
        )
        state.insert_into_playfield(restored, record.original_index)

        # The discarded card object is gone; rebuild it under its old id
        discarded = Card(
            card_id=record.target_card_id,
            rank=record.discarded_rank,
            suit=record.discarded_suit,
            position=record.discarded_position or self.stack_top_position,
        )
        state.add_to_stack(discarded)

        logger.info("Undid match: %s back to playfield, %s back on top", restored.label, discarded.label)

    def _revert_promote(self, state: GameState, record: UndoRecord) -> None:
        card = state.remove_from_stack(record.card_id)
        card.position = record.original_position
        state.insert_into_stack(card, record.original_index)

        logger.info("Undid promote: %s back to reserve slot %d", card.label, record.original_index)
