"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Caller creates a session (optionally with a layout)
2. Session deals the layout into a fresh GameState
3. During the game:
   - Input layer reports a selected card id
   - Session decides Match or Promote by looking the card up
   - ActionProcessor validates and applies, returning an UndoRecord
   - Session pushes the record; caller re-reads state
4. Undo pops one record and reverts it
5. Restart clears state and history together and deals again

PERSISTENCE RULES:
- No database: state lives in memory for the session's lifetime
- Ending a session drops its state
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable
import logging
import time
import uuid

from ..config import EngineConfig
from ..engine_core.state import GameState, Card, Zone
from ..engine_core.action import Action, ActionOutcome, RejectReason
from ..engine_core.history import UndoHistory
from ..engine_core.reducer import ActionProcessor
from ..layout import LayoutEntry, default_layout, validate_layout, deal


logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    CREATED = "created"  # No layout dealt yet
    ACTIVE = "active"  # Game in progress
    ENDED = "ended"  # Session closed


@dataclass
class Session:
    """
    A single play-through.

    Exclusively owns its GameState and UndoHistory. Presentation layers
    only ever see copies returned by the query methods.
    """
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    config: EngineConfig = field(default_factory=EngineConfig)
    created_at: float = field(default_factory=time.time)

    state: SessionState = SessionState.CREATED
    moves_applied: int = 0
    undos_applied: int = 0

    _game: GameState = field(default_factory=GameState, repr=False)
    _history: UndoHistory = field(init=False, repr=False)
    _processor: ActionProcessor = field(init=False, repr=False)

    def __post_init__(self):
        self._history = UndoHistory(max_depth=self.config.max_undo_depth)
        self._processor = ActionProcessor(stack_top_position=self.config.stack_top_position)

    # =========================================================================
    # Commands
    # =========================================================================

    def start_new_game(self, layout: Iterable[LayoutEntry] | None = None) -> None:
        """
        Clear the table and history, then deal a layout.

        Uses the default demonstration deal when no layout is given.
        Raises LayoutError before touching the current game if the
        layout is invalid.
        """
        entries = validate_layout(default_layout() if layout is None else layout)

        self._game.clear()
        self._history.clear()
        deal(self._game, entries)

        self.moves_applied = 0
        self.undos_applied = 0
        self.state = SessionState.ACTIVE
        logger.info(
            "Session %s: new game with %d playfield and %d stack cards",
            self.session_id, len(self._game.playfield), len(self._game.stack),
        )

    def on_card_selected(self, card_id: int, zone_hint: Zone | None = None) -> ActionOutcome:
        """
        Handle a click on a card.

        The zone is looked up here; zone_hint is advisory only.
        Playfield selections attempt a Match, stack selections a Promote.
        """
        zone = self._game.zone_of(card_id)
        if zone_hint is not None and zone_hint != zone:
            logger.debug(
                "Card %d reported in %s but found in %s",
                card_id, zone_hint.value, zone.value if zone else "no zone",
            )

        if zone is None:
            return ActionOutcome.rejected(
                RejectReason.UNKNOWN_CARD, f"Card {card_id} is not on the table", card_id
            )

        outcome, record = self._processor.apply(self._game, Action.for_zone(zone, card_id))
        if outcome.applied:
            self._history.push(record)
            self.moves_applied += 1
        return outcome

    def on_undo_requested(self) -> bool:
        """Revert the most recent action. False when there is nothing to undo."""
        record = self._history.peek()
        if record is None:
            return False
        if not self._processor.revert(self._game, record):
            return False
        self._history.undo()
        self.undos_applied += 1
        return True

    # =========================================================================
    # Queries
    # =========================================================================

    def get_playfield_cards(self) -> list[Card]:
        return [card.copy() for card in self._game.playfield]

    def get_stack_cards_ordered(self) -> list[Card]:
        """Stack from bottom reserve (index 0) to top (last)."""
        return [card.copy() for card in self._game.stack]

    def get_reserve_cards(self) -> list[Card]:
        """Stack cards below the top, bottom first."""
        return [card.copy() for card in self._game.reserve_cards]

    def get_top_card(self) -> Card | None:
        top = self._game.top_of_stack()
        return top.copy() if top else None

    def can_undo(self) -> bool:
        return self._history.can_undo()

    @property
    def undo_depth(self) -> int:
        return len(self._history)

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.state in {SessionState.CREATED, SessionState.ACTIVE}

    def snapshot(self) -> dict:
        """Observable summary of the table, for comparisons."""
        return self._game.snapshot()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions and deal their opening layout
    - Track active sessions
    - Clean up old sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        layout: Iterable[LayoutEntry] | None = None,
        config: EngineConfig | None = None,
    ) -> Session:
        """
        Create a new session and deal its first game.

        Args:
            layout: Opening layout (default demonstration deal if None)
            config: Engine settings (manager default if None)

        Returns:
            Active Session
        """
        session = Session(config=config or self.config)
        session.start_new_game(layout)
        self._sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """
        End a session and drop it from memory.

        Returns False if no such session existed.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.state = SessionState.ENDED
        logger.info(
            "Session %s ended after %d moves and %d undos",
            session_id, session.moves_applied, session.undos_applied,
        )
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End sessions older than max_age.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        stale = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id)
        return len(stale)
