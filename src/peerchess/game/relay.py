"""Relay payloads exchanged between two peers.

The transport delivers these dicts reliably and in order; this module only
converts them to and from typed messages.  Wire shapes::

    {"type": "move", "move": {"from": {"row": 6, "col": 4}, "to": {"row": 4, "col": 4}}}
    {"type": "game-init", "hostColor": "white", "guestColor": "black"}
    {"type": "new-game"}
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from peerchess.core.enums import Color
from peerchess.core.types import Square, is_valid_square

MOVE = "move"
GAME_INIT = "game-init"
NEW_GAME = "new-game"


@dataclass(frozen=True, slots=True)
class MoveMessage:
    from_sq: Square
    to_sq: Square


@dataclass(frozen=True, slots=True)
class GameInitMessage:
    """Sent by the host once the connection opens; the host plays white."""

    host_color: Color = Color.WHITE
    guest_color: Color = Color.BLACK


@dataclass(frozen=True, slots=True)
class NewGameMessage:
    pass


RelayMessage = Union[MoveMessage, GameInitMessage, NewGameMessage]


# ── Encoding ────────────────────────────────────────────────────────────────


def _encode_square(sq: tuple[int, int]) -> dict[str, int]:
    return {"row": sq[0], "col": sq[1]}


def encode_message(message: RelayMessage) -> dict[str, Any]:
    """Plain-dict form of *message*, ready for the transport."""
    if isinstance(message, MoveMessage):
        return {
            "type": MOVE,
            "move": {
                "from": _encode_square(message.from_sq),
                "to": _encode_square(message.to_sq),
            },
        }
    if isinstance(message, GameInitMessage):
        return {
            "type": GAME_INIT,
            "hostColor": str(message.host_color),
            "guestColor": str(message.guest_color),
        }
    if isinstance(message, NewGameMessage):
        return {"type": NEW_GAME}
    raise ValueError(f"Unsupported relay message: {message!r}")


# ── Decoding ────────────────────────────────────────────────────────────────


def _decode_square(data: Any) -> Square:
    if not isinstance(data, Mapping):
        raise ValueError(f"Invalid square payload: {data!r}")
    row = data.get("row")
    col = data.get("col")
    if not is_valid_square((row, col)):
        raise ValueError(f"Invalid square payload: {data!r}")
    return Square(row, col)


def _decode_color(value: Any) -> Color:
    if not isinstance(value, str):
        raise ValueError(f"Invalid color payload: {value!r}")
    return Color.from_name(value)


def decode_message(data: Any) -> RelayMessage:
    """Parse a received payload. Raises ``ValueError`` when malformed."""
    if not isinstance(data, Mapping):
        raise ValueError(f"Relay payload must be a mapping, got {data!r}")

    kind = data.get("type")
    if kind == MOVE:
        move = data.get("move")
        if not isinstance(move, Mapping):
            raise ValueError(f"Invalid move payload: {move!r}")
        return MoveMessage(_decode_square(move.get("from")), _decode_square(move.get("to")))
    if kind == GAME_INIT:
        host = _decode_color(data.get("hostColor"))
        guest = _decode_color(data.get("guestColor"))
        if host == guest:
            raise ValueError(f"Host and guest share a color: {host}")
        return GameInitMessage(host, guest)
    if kind == NEW_GAME:
        return NewGameMessage()
    raise ValueError(f"Unknown relay message type: {kind!r}")
