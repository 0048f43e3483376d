"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from peerchess.core import Position, Rules, parse_square

    pos = Position()
    pos.legal_destinations(parse_square("e2"))   # [Square(4, 4), Square(5, 4)]
    pos.commit_move(parse_square("e2"), parse_square("e4"))
    Rules.is_checkmate(pos)
"""

from peerchess.core.board import Board
from peerchess.core.enums import CastlingRights, Color, GameResult, MoveFlag, PieceType
from peerchess.core.move import Move
from peerchess.core.move_generator import MoveGenerator
from peerchess.core.piece import Piece
from peerchess.core.position import Position
from peerchess.core.rules import Rules
from peerchess.core.types import (
    Square,
    is_valid_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "Square",
    "is_valid_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
]
