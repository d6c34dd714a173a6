"""
API Module - HTTP interface for card table clients.

Exposes the engine via REST API. A client:
1. Creates a game session (default or custom layout)
2. Renders the returned playfield and stack
3. Reports card clicks and undo presses
4. Re-renders from the returned table state

All state is session-scoped. Run with:
    uvicorn stackmatch.api.app:create_app --factory
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    RestartRequest,
    SelectCardRequest,
    # Responses
    SessionResponse,
    GameStateResponse,
    SelectCardResponse,
    UndoResponse,
    ErrorResponse,
    # Shared
    CardInfo,
    LayoutEntryInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "RestartRequest",
    "SelectCardRequest",
    # Responses
    "SessionResponse",
    "GameStateResponse",
    "SelectCardResponse",
    "UndoResponse",
    "ErrorResponse",
    # Shared
    "CardInfo",
    "LayoutEntryInfo",
    # Service
    "APIService",
    "create_app",
]
