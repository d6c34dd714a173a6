"""
FastAPI Application - REST API for card table clients.

Endpoints:
    POST   /api/v1/sessions                 Create game session
    GET    /api/v1/sessions                 List active sessions
    GET    /api/v1/sessions/{id}            Get table state
    DELETE /api/v1/sessions/{id}            End session
    POST   /api/v1/sessions/{id}/select     Report a card click
    POST   /api/v1/sessions/{id}/undo       Undo the last move
    POST   /api/v1/sessions/{id}/restart    Deal a new game

The client draws cards and animates moves; every rule lives in the engine.
Handlers are coroutines that never await, so the event loop runs each
request to completion and moves on a session never interleave.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import logging
import os

from fastapi import FastAPI, Body
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import EngineConfig
from ..layout import LayoutError
from ..session import SessionManager
from .service import APIService
from .schemas import (
    # Request models
    CreateSessionRequest,
    RestartRequest,
    SelectCardRequest,
    # Response models
    SessionResponse,
    GameStateResponse,
    SelectCardResponse,
    UndoResponse,
    ErrorResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    # Enums
    ErrorCode,
)

# Environment configuration
STACKMATCH_ENV = os.getenv("STACKMATCH_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Stackmatch Engine API",
        description="""
Two-zone card matching solitaire engine.

## Rules

* Click a **playfield** card whose rank is one away from the stack top to match it.
  The matched card becomes the new top; the old top is discarded.
* Click a **reserve** stack card to promote it to the top. Only allowed when no
  playfield card can match the current top.
* Every move can be undone.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `INVALID_LAYOUT` | Layout cannot be dealt |

Rejected moves return `applied=false` with a `reason`, not an error.
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(
        session_manager=SessionManager(config=EngineConfig.from_env())
    )
    logger.info("Stackmatch API starting (%s)", STACKMATCH_ENV)

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def not_found_or(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(
                response.error_code,
                response.error,
                status_code=404,
            )
        return response

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse, "description": "Invalid layout"}},
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(
        body: Optional[CreateSessionRequest] = Body(None),
    ) -> Union[SessionResponse, JSONResponse]:
        """
        Create a new game session.

        Omit the body (or `layout`) for the default demonstration deal.
        """
        try:
            return api_service.create_session(body or CreateSessionRequest())
        except LayoutError as e:
            return make_error_response(ErrorCode.INVALID_LAYOUT, str(e))

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get table state",
    )
    async def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Get the playfield, the ordered stack and undo availability."""
        return not_found_or(api_service.get_game_state(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        """End a game session and release its state."""
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/select",
        response_model=SelectCardResponse,
        responses={404: {"model": ErrorResponse, "description": "Session not found"}},
        tags=["Game"],
        summary="Report a card click",
    )
    async def select_card(
        session_id: str,
        body: SelectCardRequest,
    ) -> Union[SelectCardResponse, JSONResponse]:
        """
        Select a card.

        Playfield cards attempt a match, reserve stack cards a promotion.
        """
        return not_found_or(api_service.select_card(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/undo",
        response_model=UndoResponse,
        responses={404: {"model": ErrorResponse, "description": "Session not found"}},
        tags=["Game"],
        summary="Undo the last move",
    )
    async def undo(session_id: str) -> Union[UndoResponse, JSONResponse]:
        """Undo the most recent move. `applied=false` when history is empty."""
        return not_found_or(api_service.undo(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/restart",
        response_model=GameStateResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid layout"},
            404: {"model": ErrorResponse, "description": "Session not found"},
        },
        tags=["Game"],
        summary="Deal a new game",
    )
    async def restart(
        session_id: str,
        body: Optional[RestartRequest] = Body(None),
    ) -> Union[GameStateResponse, JSONResponse]:
        """Clear the table and undo history and deal again."""
        try:
            return not_found_or(api_service.restart(session_id, body or RestartRequest()))
        except LayoutError as e:
            return make_error_response(ErrorCode.INVALID_LAYOUT, str(e))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="stackmatch-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Stackmatch Engine API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
