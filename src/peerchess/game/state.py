"""Game state machine — tracks phase transitions and move history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from peerchess.core.enums import Color, GameResult
from peerchess.core.move import Move
from peerchess.core.piece import Piece
from peerchess.core.position import Position
from peerchess.core.rules import Rules
from peerchess.core.types import Square
from peerchess.game.interfaces import GameEndReason, GamePhase

_LOGGER = logging.getLogger(__name__)


@dataclass
class GameState:
    """Manages game lifecycle: phase, result, move history.

    This is a pure data/logic class — no threading, no UI.
    """

    position: Position = field(default_factory=Position, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    end_reason: GameEndReason = field(default=GameEndReason.NONE, init=False)
    move_history: list[Move] = field(default_factory=list, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, position: Position | None = None) -> None:
        """Initialise (or reset) the game; nothing carries over."""
        self.position = position if position is not None else Position()
        self.phase = GamePhase.AWAITING_MOVE
        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        self.move_history.clear()
        self._check_game_over()

    # ── Move application ─────────────────────────────────────────────────

    def commit_move(
        self, from_sq: tuple[int, int], to_sq: tuple[int, int]
    ) -> Move | None:
        """Validate and apply a move. Returns the record, or None if rejected."""
        if self.phase != GamePhase.AWAITING_MOVE:
            return None
        if not self.position.is_legal(from_sq, to_sq):
            return None

        move = self.position.make_move(from_sq, to_sq)
        self.move_history.append(move)
        _LOGGER.debug("Committed %s (%s)", move, move.flag.name)

        self._check_game_over()
        return move

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    def legal_destinations(self, sq: tuple[int, int]) -> list[Square]:
        if self.is_game_over:
            return []
        return self.position.legal_destinations(sq)

    def captured(self, color: Color) -> list[Piece]:
        """Pieces of *color* removed from the board, in capture order."""
        return list(self.position.captured[color])

    def is_check(self, color: Color | None = None) -> bool:
        return Rules.is_check(self.position, color)

    def is_checkmate(self) -> bool:
        return Rules.is_checkmate(self.position)

    def is_stalemate(self) -> bool:
        return Rules.is_stalemate(self.position)

    # ── Internal ─────────────────────────────────────────────────────────

    def _check_game_over(self) -> None:
        result = Rules.game_result(self.position)
        if result == GameResult.IN_PROGRESS:
            return
        self.result = result
        self.end_reason = (
            GameEndReason.STALEMATE if result == GameResult.DRAW else GameEndReason.CHECKMATE
        )
        self.phase = GamePhase.GAME_OVER
        _LOGGER.info("Game over: %s by %s", result.name, self.end_reason.name.lower())
