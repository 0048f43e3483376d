"""Shared pytest fixtures and position helpers used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator

import pytest

from peerchess.core.board import Board
from peerchess.core.enums import CastlingRights, Color
from peerchess.core.piece import Piece
from peerchess.core.position import Position
from peerchess.core.types import parse_square

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for signal tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


def make_position(
    placement: dict[str, str],
    side_to_move: Color = Color.WHITE,
    castling: CastlingRights = CastlingRights.NONE,
    en_passant: str | None = None,
) -> Position:
    """Position from ``{"e1": "K", "e8": "k", ...}`` (uppercase = white)."""
    board = Board.from_placement(
        {parse_square(name): Piece.from_char(char) for name, char in placement.items()}
    )
    return Position(
        board=board,
        side_to_move=side_to_move,
        castling=castling,
        en_passant=parse_square(en_passant) if en_passant else None,
    )


def play(position: Position, *moves: str) -> None:
    """Commit long-algebraic moves (``"e2e4"``), asserting each is accepted."""
    for text in moves:
        from_sq = parse_square(text[:2])
        to_sq = parse_square(text[2:4])
        assert position.commit_move(from_sq, to_sq), f"{text} rejected"
