"""
Stackmatch - Two-zone card matching solitaire engine

A deterministic, rules-driven engine for a playfield/stack solitaire.
The engine provides:
- Card and zone state management
- Match and promote rules
- Single-step undo for every applied action
- Session orchestration for presentation layers (HTTP, terminal)
"""

__version__ = "0.1.0"
