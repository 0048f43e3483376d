"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from peerchess.core.enums import Color, PieceType
from peerchess.core.piece import Piece
from peerchess.core.types import ALL_SQUARES, Square, square_index

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 64-square board of optional pieces.

    Pieces are immutable, so :meth:`copy` is a structural copy with no
    aliasing between the original and the scratch board.
    """

    __slots__ = ("_squares",)

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: tuple[int, int]) -> Piece | None:
        return self._squares[square_index(sq)]

    def __setitem__(self, sq: tuple[int, int], piece: Piece | None) -> None:
        self._squares[square_index(sq)] = piece

    def is_empty(self, sq: tuple[int, int]) -> bool:
        return self._squares[square_index(sq)] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> list[tuple[Square, Piece]]:
        """Occupied squares (row-major), optionally restricted to *color*."""
        found: list[tuple[Square, Piece]] = []
        for sq, piece in zip(ALL_SQUARES, self._squares):
            if piece is None:
                continue
            if color is None or piece.color == color:
                found.append((sq, piece))
        return found

    def find_king(self, color: Color) -> Square:
        """Return the king square for *color*."""
        king = Piece(color, PieceType.KING)
        for sq, piece in zip(ALL_SQUARES, self._squares):
            if piece == king:
                return sq
        raise ValueError(f"No {color.name} king on board")

    def piece_count(self) -> int:
        return sum(1 for piece in self._squares if piece is not None)

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b[Color.BLACK.home_row, col] = Piece(Color.BLACK, pt)
            b[Color.BLACK.pawn_row, col] = Piece(Color.BLACK, PieceType.PAWN)
            b[Color.WHITE.pawn_row, col] = Piece(Color.WHITE, PieceType.PAWN)
            b[Color.WHITE.home_row, col] = Piece(Color.WHITE, pt)
        return b

    @classmethod
    def from_placement(cls, placement: dict[tuple[int, int], Piece]) -> Board:
        """Board holding exactly the pieces in *placement*."""
        b = cls()
        for sq, piece in placement.items():
            b[sq] = piece
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                p = self[row, col]
                cells.append(str(p) if p else ".")
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
