"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a client (browser, mobile app,
test harness) and the engine. The client renders cards and reports
clicks; the engine owns every rule.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- INVALID_LAYOUT: Submitted layout cannot be dealt
- VALIDATION_ERROR: Request body is malformed

Rejected moves are not errors: they come back with applied=false.
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    CREATED = "created"
    ACTIVE = "active"
    ENDED = "ended"


class SuitName(str, Enum):
    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    HEARTS = "hearts"
    SPADES = "spades"


class ZoneName(str, Enum):
    PLAYFIELD = "playfield"
    STACK = "stack"


class OutcomeKindName(str, Enum):
    MATCH = "match"
    PROMOTE = "promote"
    REJECTED = "rejected"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_LAYOUT = "INVALID_LAYOUT"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card information for display."""
    card_id: int
    rank: int = Field(..., ge=1, le=13)
    suit: SuitName
    label: str = Field(..., description="Short label, e.g. 'Q♣'")
    face_up: bool = True
    x: float = 0.0
    y: float = 0.0

    model_config = {"from_attributes": True}


class LayoutEntryInfo(BaseModel):
    """One card of an opening layout."""
    rank: int = Field(..., ge=1, le=13)
    suit: SuitName
    zone: ZoneName
    x: float = 0.0
    y: float = 0.0


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Create a session. Omit layout for the default demonstration deal."""
    layout: Optional[list[LayoutEntryInfo]] = None


class RestartRequest(BaseModel):
    """Deal a new game in an existing session."""
    layout: Optional[list[LayoutEntryInfo]] = None


class SelectCardRequest(BaseModel):
    """A click on a card."""
    card_id: int
    zone_hint: Optional[ZoneName] = Field(
        None, description="Where the client thinks the card is; advisory only"
    )


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Complete table state for display."""
    session_id: str
    status: SessionStatus
    playfield: list[CardInfo] = Field(default_factory=list)
    stack: list[CardInfo] = Field(
        default_factory=list, description="Bottom reserve first, top card last"
    )
    top_card: Optional[CardInfo] = None
    can_undo: bool = False
    undo_depth: int = 0
    moves_applied: int = 0
    api_version: str = "v1"


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    created_at: float = 0.0
    game_state: GameStateResponse
    api_version: str = "v1"


class SelectCardResponse(BaseModel):
    """Result of a card selection."""
    session_id: str
    applied: bool
    kind: OutcomeKindName
    card_id: Optional[int] = None
    reason: Optional[str] = Field(None, description="Reject reason code when applied=false")
    message: str = ""
    game_state: GameStateResponse
    api_version: str = "v1"


class UndoResponse(BaseModel):
    """Result of an undo request."""
    session_id: str
    applied: bool
    game_state: GameStateResponse
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
