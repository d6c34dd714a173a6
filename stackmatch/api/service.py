"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session calls
2. Manages sessions
3. Formats table state for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .schemas import (
    # Requests
    CreateSessionRequest,
    RestartRequest,
    SelectCardRequest,
    LayoutEntryInfo,
    # Responses
    SessionResponse,
    GameStateResponse,
    SelectCardResponse,
    UndoResponse,
    ErrorResponse,
    # Shared
    CardInfo,
    # Enums
    ErrorCode,
    SessionStatus,
    OutcomeKindName,
)
from ..engine_core.state import Card, Suit, Zone
from ..layout import LayoutEntry, validate_layout
from ..session import SessionManager, Session


logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Start a game
        session_response = service.create_session(CreateSessionRequest())

        # Click a card
        result = service.select_card(session_id, SelectCardRequest(card_id=3))

        # Take it back
        service.undo(session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """
        Create a new game session.

        Raises LayoutError if the submitted layout cannot be dealt.
        """
        layout = self._convert_layout(request.layout)
        session = self.session_manager.create_session(layout=layout)
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            created_at=session.created_at,
            game_state=self._build_game_state(session),
        )

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Get current table state."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        return self._build_game_state(session)

    def select_card(
        self,
        session_id: str,
        request: SelectCardRequest,
    ) -> SelectCardResponse | ErrorResponse:
        """Report a card click to the session."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        zone_hint = Zone(request.zone_hint.value) if request.zone_hint else None
        outcome = session.on_card_selected(request.card_id, zone_hint=zone_hint)

        return SelectCardResponse(
            session_id=session_id,
            applied=outcome.applied,
            kind=OutcomeKindName(outcome.kind.value),
            card_id=outcome.card_id,
            reason=outcome.reason.value if outcome.reason else None,
            message=outcome.message,
            game_state=self._build_game_state(session),
        )

    def undo(self, session_id: str) -> UndoResponse | ErrorResponse:
        """Undo the most recent move."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        applied = session.on_undo_requested()
        return UndoResponse(
            session_id=session_id,
            applied=applied,
            game_state=self._build_game_state(session),
        )

    def restart(
        self,
        session_id: str,
        request: RestartRequest,
    ) -> GameStateResponse | ErrorResponse:
        """
        Deal a new game in an existing session.

        Raises LayoutError if the submitted layout cannot be dealt.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)

        session.start_new_game(self._convert_layout(request.layout))
        return self._build_game_state(session)

    def end_session(self, session_id: str) -> bool:
        """End a game session."""
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        """List active session IDs."""
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _session_not_found(self, session_id: str) -> ErrorResponse:
        logger.debug("Session %s not found", session_id)
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _convert_layout(
        self, entries: list[LayoutEntryInfo] | None
    ) -> list[LayoutEntry] | None:
        """Convert request layout entries to engine layout entries."""
        if entries is None:
            return None
        return validate_layout(
            LayoutEntry(
                rank=e.rank,
                suit=Suit(e.suit.value),
                zone=Zone(e.zone.value),
                position=(e.x, e.y),
            )
            for e in entries
        )

    def _build_game_state(self, session: Session) -> GameStateResponse:
        """Build complete table state response."""
        top = session.get_top_card()
        return GameStateResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            playfield=[self._card_info(c) for c in session.get_playfield_cards()],
            stack=[self._card_info(c) for c in session.get_stack_cards_ordered()],
            top_card=self._card_info(top) if top else None,
            can_undo=session.can_undo(),
            undo_depth=session.undo_depth,
            moves_applied=session.moves_applied,
        )

    def _card_info(self, card: Card) -> CardInfo:
        return CardInfo(
            card_id=card.card_id,
            rank=card.rank,
            suit=card.suit.value,
            label=card.label,
            face_up=card.face_up,
            x=card.position[0],
            y=card.position[1],
        )
