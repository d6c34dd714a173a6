"""
Session Module - Manages in-memory game sessions.

A session represents one play-through:
- Created when a player starts a game
- Owns the table state and the undo history
- Turns card selections into Match or Promote actions
- Destroyed when the player leaves

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import SessionManager, Session, SessionState

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
]
