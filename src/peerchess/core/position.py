"""Position — complete rules state (board + metadata) and the move committer."""

from __future__ import annotations

from peerchess.core.board import Board
from peerchess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from peerchess.core.move import Move
from peerchess.core.move_generator import (
    KINGSIDE_ROOK_COL,
    QUEENSIDE_ROOK_COL,
    MoveGenerator,
)
from peerchess.core.piece import Piece
from peerchess.core.types import Square, is_valid_square


class Position:
    """Full chess position: board, side to move, castling, en passant,
    king squares and the per-colour capture log.

    State only moves forward: the single mutator is :meth:`commit_move`
    (or :meth:`make_move` once legality is known).  There is no undo.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "king_squares",
        "captured",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: tuple[int, int] | None = None,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = Square(*en_passant) if en_passant is not None else None
        self.king_squares: dict[Color, Square] = {
            Color.WHITE: self.board.find_king(Color.WHITE),
            Color.BLACK: self.board.find_king(Color.BLACK),
        }
        self.captured: dict[Color, list[Piece]] = {Color.WHITE: [], Color.BLACK: []}

    # ── Legality ─────────────────────────────────────────────────────────

    def is_legal(self, from_sq: tuple[int, int], to_sq: tuple[int, int]) -> bool:
        return MoveGenerator(self).is_legal(from_sq, to_sq)

    def legal_destinations(self, sq: tuple[int, int]) -> list[Square]:
        return MoveGenerator(self).legal_destinations(sq)

    # ── Core move operations ─────────────────────────────────────────────

    def commit_move(self, from_sq: tuple[int, int], to_sq: tuple[int, int]) -> bool:
        """Apply the move if legal.

        Returns ``False`` and leaves every field untouched when the move is
        illegal (wrong side, blocked, self-check, off-board coordinates).
        """
        if not self.is_legal(from_sq, to_sq):
            return False
        self.make_move(from_sq, to_sq)
        return True

    def make_move(self, from_sq: tuple[int, int], to_sq: tuple[int, int]) -> Move:
        """Apply a move already known to be legal and describe what happened."""
        if not (is_valid_square(from_sq) and is_valid_square(to_sq)):
            raise ValueError(f"Invalid move coordinates: {from_sq!r} -> {to_sq!r}")
        from_sq = Square(*from_sq)
        to_sq = Square(*to_sq)

        piece = self.board[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {from_sq}")

        color = piece.color
        pt = piece.piece_type
        flag = MoveFlag.NORMAL

        # Captures are logged against the pre-move board
        captured = self.board[to_sq]
        if captured is not None:
            self.captured[captured.color].append(captured)
            self._drop_rook_rights(to_sq, captured)

        # En passant: the captured pawn sits one rank behind the target
        if pt == PieceType.PAWN and to_sq == self.en_passant:
            ep_capture_sq = Square(to_sq.row - color.forward, to_sq.col)
            captured = self.board[ep_capture_sq]
            if captured is not None:
                self.captured[captured.color].append(captured)
            self.board[ep_capture_sq] = None
            flag = MoveFlag.EN_PASSANT

        # En passant target for the opponent
        self.en_passant = None
        if pt == PieceType.PAWN and abs(to_sq.row - from_sq.row) == 2:
            self.en_passant = Square((from_sq.row + to_sq.row) // 2, from_sq.col)
            flag = MoveFlag.DOUBLE_PAWN

        # Slide the rook for castling
        if pt == PieceType.KING and abs(to_sq.col - from_sq.col) == 2:
            row = from_sq.row
            if to_sq.col > from_sq.col:
                rook_from = Square(row, KINGSIDE_ROOK_COL)
                rook_to = Square(row, to_sq.col - 1)
                flag = MoveFlag.CASTLE_KINGSIDE
            else:
                rook_from = Square(row, QUEENSIDE_ROOK_COL)
                rook_to = Square(row, to_sq.col + 1)
                flag = MoveFlag.CASTLE_QUEENSIDE
            self.board[rook_to] = self.board[rook_from]
            self.board[rook_from] = None

        # Castling rights and king tracking
        if pt == PieceType.KING:
            self.castling &= ~CastlingRights.for_color(color)
            self.king_squares[color] = to_sq
        elif pt == PieceType.ROOK:
            self._drop_rook_rights(from_sq, piece)

        self.board[to_sq] = piece
        self.board[from_sq] = None

        if pt == PieceType.PAWN and to_sq.row == color.promotion_row:
            self.board[to_sq] = piece.promoted()
            flag = MoveFlag.PROMOTION

        self.side_to_move = self.side_to_move.opposite
        return Move(from_sq, to_sq, flag, captured)

    # ── Castling bookkeeping ─────────────────────────────────────────────

    def _drop_rook_rights(self, sq: Square, piece: Piece) -> None:
        """Clear the flag tied to a rook leaving (or lost on) its corner."""
        if piece.piece_type != PieceType.ROOK or sq.row != piece.color.home_row:
            return
        if sq.col == KINGSIDE_ROOK_COL:
            self.castling &= ~CastlingRights.for_side(piece.color, True)
        elif sq.col == QUEENSIDE_ROOK_COL:
            self.castling &= ~CastlingRights.for_side(piece.color, False)

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Deep copy of the whole rules state."""
        pos = Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
        )
        pos.king_squares = dict(self.king_squares)
        pos.captured = {color: list(pieces) for color, pieces in self.captured.items()}
        return pos

    def piece_count(self) -> int:
        return self.board.piece_count()

    def captured_count(self) -> int:
        return sum(len(pieces) for pieces in self.captured.values())

    def __repr__(self) -> str:
        return f"{self.board!r}\n{self.side_to_move} to move"
