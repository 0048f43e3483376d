"""Move value object describing a committed move."""

from __future__ import annotations

from dataclasses import dataclass

from peerchess.core.enums import MoveFlag
from peerchess.core.piece import Piece
from peerchess.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of a move that has been applied to a position.

    ``captured`` is the piece removed from the board, which for an
    en passant capture does not stand on ``to_sq``.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    captured: Piece | None = None

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"

    @property
    def is_capture(self) -> bool:
        return self.captured is not None
