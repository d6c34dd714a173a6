"""
Engine configuration.

The only spatial value the engine needs is where a card lands when it
becomes the stack top through a match. Everything else about layout
belongs to the presentation layer.
"""

from __future__ import annotations
from dataclasses import dataclass
import os


DEFAULT_STACK_TOP_POSITION: tuple[float, float] = (800.0, 290.0)


@dataclass(frozen=True)
class EngineConfig:
    """Per-session engine settings."""
    stack_top_position: tuple[float, float] = DEFAULT_STACK_TOP_POSITION
    max_undo_depth: int | None = None  # None = unbounded

    @classmethod
    def from_env(cls) -> EngineConfig:
        """
        Build config from environment variables.

        STACKMATCH_STACK_TOP_X / STACKMATCH_STACK_TOP_Y override the
        canonical stack position, STACKMATCH_MAX_UNDO_DEPTH bounds history.
        """
        x = float(os.getenv("STACKMATCH_STACK_TOP_X", DEFAULT_STACK_TOP_POSITION[0]))
        y = float(os.getenv("STACKMATCH_STACK_TOP_Y", DEFAULT_STACK_TOP_POSITION[1]))
        depth = os.getenv("STACKMATCH_MAX_UNDO_DEPTH")
        return cls(
            stack_top_position=(x, y),
            max_undo_depth=int(depth) if depth else None,
        )
