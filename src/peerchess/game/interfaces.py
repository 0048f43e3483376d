"""Abstract interfaces and state enums for the game layer.

The presentation and transport collaborators depend on
:class:`IGameController`, not on the concrete controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import Any

from peerchess.core.enums import Color

# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    """Why the game ended."""

    NONE = 0
    CHECKMATE = auto()
    STALEMATE = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self, local_color: Color | None = None) -> None:
        """Discard the current game and start a fresh one."""

    @abstractmethod
    def submit_move(self, from_sq: tuple[int, int], to_sq: tuple[int, int]) -> bool:
        """Submit a local move. Returns True if legal and applied."""

    @abstractmethod
    def receive_message(self, data: Any) -> bool:
        """Handle a relay message from the remote peer."""
