"""Move legality, legal-destination generation and attack detection.

Two layers:

* the *pattern* layer answers "does this piece's movement geometry (with
  path clearance) take it from A to B" and never looks at king safety;
* :meth:`MoveGenerator.is_legal` adds the ownership checks and the
  simulate-then-test-for-check step on top of it.

Attack detection only ever calls the pattern layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from peerchess.core.board import Board
from peerchess.core.enums import CastlingRights, Color, PieceType
from peerchess.core.piece import Piece
from peerchess.core.types import ALL_SQUARES, Square, is_valid_square

if TYPE_CHECKING:
    from peerchess.core.position import Position


KING_START_COL = 4
KINGSIDE_KING_COL = 6
QUEENSIDE_KING_COL = 2
KINGSIDE_ROOK_COL = 7
QUEENSIDE_ROOK_COL = 0


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


# -- Pattern layer ----------------------------------------------------------


def is_path_clear(board: Board, from_sq: tuple[int, int], to_sq: tuple[int, int]) -> bool:
    """No occupied square strictly between *from_sq* and *to_sq*.

    Walks in unit steps, so callers must only pass rank, file or diagonal
    displacements.
    """
    row_step = _sign(to_sq[0] - from_sq[0])
    col_step = _sign(to_sq[1] - from_sq[1])
    row = from_sq[0] + row_step
    col = from_sq[1] + col_step
    while (row, col) != (to_sq[0], to_sq[1]):
        if board[row, col] is not None:
            return False
        row += row_step
        col += col_step
    return True


def rook_pattern(board: Board, from_sq: tuple[int, int], to_sq: tuple[int, int]) -> bool:
    if from_sq[0] != to_sq[0] and from_sq[1] != to_sq[1]:
        return False
    return is_path_clear(board, from_sq, to_sq)


def bishop_pattern(board: Board, from_sq: tuple[int, int], to_sq: tuple[int, int]) -> bool:
    d_row = abs(to_sq[0] - from_sq[0])
    d_col = abs(to_sq[1] - from_sq[1])
    if d_row != d_col or d_row == 0:
        return False
    return is_path_clear(board, from_sq, to_sq)


def queen_pattern(board: Board, from_sq: tuple[int, int], to_sq: tuple[int, int]) -> bool:
    return rook_pattern(board, from_sq, to_sq) or bishop_pattern(board, from_sq, to_sq)


def knight_pattern(from_sq: tuple[int, int], to_sq: tuple[int, int]) -> bool:
    d_row = abs(to_sq[0] - from_sq[0])
    d_col = abs(to_sq[1] - from_sq[1])
    return (d_row, d_col) in ((2, 1), (1, 2))


def king_step_pattern(from_sq: tuple[int, int], to_sq: tuple[int, int]) -> bool:
    d_row = abs(to_sq[0] - from_sq[0])
    d_col = abs(to_sq[1] - from_sq[1])
    return d_row <= 1 and d_col <= 1 and (d_row, d_col) != (0, 0)


def pawn_attack_pattern(
    color: Color, from_sq: tuple[int, int], to_sq: tuple[int, int]
) -> bool:
    """One step diagonally forward, regardless of what stands there."""
    return (
        to_sq[0] - from_sq[0] == color.forward and abs(to_sq[1] - from_sq[1]) == 1
    )


def attacks(
    board: Board, piece: Piece, from_sq: tuple[int, int], to_sq: tuple[int, int]
) -> bool:
    """Could *piece* standing on *from_sq* capture on *to_sq*?"""
    pt = piece.piece_type
    if pt == PieceType.PAWN:
        return pawn_attack_pattern(piece.color, from_sq, to_sq)
    if pt == PieceType.KNIGHT:
        return knight_pattern(from_sq, to_sq)
    if pt == PieceType.BISHOP:
        return bishop_pattern(board, from_sq, to_sq)
    if pt == PieceType.ROOK:
        return rook_pattern(board, from_sq, to_sq)
    if pt == PieceType.QUEEN:
        return queen_pattern(board, from_sq, to_sq)
    return king_step_pattern(from_sq, to_sq)


def is_square_attacked(board: Board, sq: tuple[int, int], by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color* on *board*?"""
    for from_sq, piece in board.pieces(by_color):
        if from_sq == sq:
            continue
        if attacks(board, piece, from_sq, sq):
            return True
    return False


# -- Legality layer ---------------------------------------------------------


class MoveGenerator:
    """Legality checks and legal-destination enumeration for a :class:`Position`.

    Never mutates the position: look-ahead runs on scratch board copies.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def is_legal(self, from_sq: tuple[int, int], to_sq: tuple[int, int]) -> bool:
        """Whether the side to move may move the piece on *from_sq* to *to_sq*."""
        if not (is_valid_square(from_sq) and is_valid_square(to_sq)):
            return False
        from_sq = Square(*from_sq)
        to_sq = Square(*to_sq)

        piece = self._board[from_sq]
        if piece is None or piece.color != self._pos.side_to_move:
            return False
        target = self._board[to_sq]
        if target is not None and target.color == piece.color:
            return False

        if not self.matches_pattern(piece, from_sq, to_sq):
            return False

        return not self._leaves_king_in_check(piece, from_sq, to_sq)

    def legal_destinations(self, sq: tuple[int, int]) -> list[Square]:
        """All squares the piece on *sq* may legally move to, row-major."""
        if not is_valid_square(sq):
            return []
        piece = self._board[sq]
        if piece is None or piece.color != self._pos.side_to_move:
            return []
        return [to_sq for to_sq in ALL_SQUARES if self.is_legal(sq, to_sq)]

    def has_legal_move(self) -> bool:
        """Whether the side to move has at least one legal move."""
        for from_sq, _piece in self._board.pieces(self._pos.side_to_move):
            for to_sq in ALL_SQUARES:
                if self.is_legal(from_sq, to_sq):
                    return True
        return False

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(
        self,
        color: Color,
        board: Board | None = None,
        king_sq: tuple[int, int] | None = None,
    ) -> bool:
        """Is *color*'s king attacked by the opponent?

        *board* and *king_sq* default to the live position; look-ahead passes
        a scratch board (and, for king moves, the king's new square).
        """
        if board is None:
            board = self._board
        if king_sq is None:
            king_sq = self._pos.king_squares[color]
        return is_square_attacked(board, king_sq, color.opposite)

    def is_square_attacked(
        self, sq: tuple[int, int], by_color: Color, board: Board | None = None
    ) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return is_square_attacked(self._board if board is None else board, sq, by_color)

    # -- Movement patterns --------------------------------------------------

    def matches_pattern(self, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
        """Movement geometry, path clearance and special-move preconditions.

        Does not consider whether the mover's own king is left in check.
        """
        pt = piece.piece_type
        if pt == PieceType.PAWN:
            return self._pawn_pattern(piece.color, from_sq, to_sq)
        if pt == PieceType.KING:
            if king_step_pattern(from_sq, to_sq):
                return True
            return self._castling_pattern(piece.color, from_sq, to_sq)
        return attacks(self._board, piece, from_sq, to_sq)

    def _pawn_pattern(self, color: Color, from_sq: Square, to_sq: Square) -> bool:
        board = self._board
        forward = color.forward
        d_row = to_sq.row - from_sq.row
        d_col = to_sq.col - from_sq.col

        if d_col == 0:
            if d_row == forward:
                return board.is_empty(to_sq)
            if d_row == 2 * forward and from_sq.row == color.pawn_row:
                return board.is_empty((from_sq.row + forward, from_sq.col)) and (
                    board.is_empty(to_sq)
                )
            return False

        if abs(d_col) == 1 and d_row == forward:
            target = board[to_sq]
            if target is not None:
                return target.color != color
            return to_sq == self._pos.en_passant
        return False

    def _castling_pattern(self, color: Color, from_sq: Square, to_sq: Square) -> bool:
        home_row = color.home_row
        if from_sq != (home_row, KING_START_COL) or to_sq.row != home_row:
            return False

        if to_sq.col == KINGSIDE_KING_COL:
            kingside = True
            rook_col = KINGSIDE_ROOK_COL
        elif to_sq.col == QUEENSIDE_KING_COL:
            kingside = False
            rook_col = QUEENSIDE_ROOK_COL
        else:
            return False

        if not self._pos.castling & CastlingRights.for_side(color, kingside):
            return False

        board = self._board
        if board[home_row, rook_col] != Piece(color, PieceType.ROOK):
            return False
        if not is_path_clear(board, from_sq, (home_row, rook_col)):
            return False

        if self.is_in_check(color):
            return False
        step = 1 if kingside else -1
        opponent = color.opposite
        for col in (KING_START_COL + step, KING_START_COL + 2 * step):
            if is_square_attacked(board, (home_row, col), opponent):
                return False
        return True

    # -- Look-ahead ---------------------------------------------------------

    def _leaves_king_in_check(self, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
        scratch = self._board.copy()
        if (
            piece.piece_type == PieceType.PAWN
            and to_sq == self._pos.en_passant
            and scratch[to_sq] is None
        ):
            scratch[to_sq.row - piece.color.forward, to_sq.col] = None
        scratch[to_sq] = piece
        scratch[from_sq] = None

        king_sq = to_sq if piece.piece_type == PieceType.KING else None
        return self.is_in_check(piece.color, scratch, king_sq)
