"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from peerchess.core.enums import Color, PieceType

# Letter per PieceType, in enum order; white is uppercase
_LETTERS = "pnbrqk"

_BY_LETTER: dict[str, tuple[Color, PieceType]] = {}
for _pt, _ch in zip(PieceType, _LETTERS):
    _BY_LETTER[_ch.upper()] = (Color.WHITE, _pt)
    _BY_LETTER[_ch] = (Color.BLACK, _pt)


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """Piece letter (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.piece_type - PieceType.PAWN]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from its letter, e.g. 'N' → white knight."""
        try:
            color, ptype = _BY_LETTER[char]
        except (KeyError, TypeError):
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    def promoted(self) -> Piece:
        """The queen this piece becomes on the last rank."""
        return Piece(self.color, PieceType.QUEEN)
