"""High-level chess rules: check, checkmate and stalemate detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from peerchess.core.enums import Color, GameResult
from peerchess.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from peerchess.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Every method is a pure query.  Only checkmate and stalemate end a game;
    there are no draw-by-rule conditions.
    """

    @staticmethod
    def is_check(position: Position, color: Color | None = None) -> bool:
        """Is *color*'s king (default: side to move) attacked?"""
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move if color is None else color)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        gen = MoveGenerator(position)
        if not gen.is_in_check(position.side_to_move):
            return False
        return not gen.has_legal_move()

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        gen = MoveGenerator(position)
        if gen.is_in_check(position.side_to_move):
            return False
        return not gen.has_legal_move()

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Determine the current game result."""
        gen = MoveGenerator(position)
        if gen.has_legal_move():
            return GameResult.IN_PROGRESS
        if gen.is_in_check(position.side_to_move):
            return (
                GameResult.BLACK_WINS
                if position.side_to_move == Color.WHITE
                else GameResult.WHITE_WINS
            )
        return GameResult.DRAW  # stalemate
