"""GameController — the central orchestrator of one peer's game.

Coordinates: GameState, the local player's input and the relay messages
exchanged with the remote peer.  Emits events via simple callbacks so the
UI / transport / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from peerchess.core.enums import Color, GameResult
from peerchess.core.move import Move
from peerchess.game.interfaces import GameEndReason, GamePhase, IGameController
from peerchess.game.relay import (
    GameInitMessage,
    MoveMessage,
    NewGameMessage,
    RelayMessage,
    decode_message,
    encode_message,
)
from peerchess.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, "GameState"], None]
GameOverCallback = Callable[[GameResult, GameEndReason], None]
PhaseCallback = Callable[[GamePhase], None]
OutboundCallback = Callable[[dict[str, Any]], None]  # payload for the transport
NewGameCallback = Callable[["Color | None"], None]  # local color


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_outbound: list[OutboundCallback] = field(default_factory=list)
    on_new_game: list[NewGameCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a two-peer chess game from one side's point of view.

    ``local_color`` is the colour played at this instance; ``None`` means
    both sides are local (hot-seat).  Local moves are relayed outbound,
    remote moves are replayed with the same coordinates so both peers'
    positions stay identical.

    Thread-safety: methods are designed to be called from a single thread.
    The caller serialises local input and inbound messages.
    """

    __slots__ = ("_state", "_local_color", "events")

    def __init__(self, *, local_color: Color | None = None) -> None:
        self._state = GameState()
        self._local_color = local_color
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def local_color(self) -> Color | None:
        return self._local_color

    @property
    def is_local_turn(self) -> bool:
        return self._local_color is None or self._state.side_to_move == self._local_color

    @property
    def accepts_input(self) -> bool:
        """Whether the local player may move right now."""
        return self._state.phase == GamePhase.AWAITING_MOVE and self.is_local_turn

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, local_color: Color | None = None) -> None:
        self._local_color = local_color
        self._state = GameState()
        self._state.setup()
        _LOGGER.info(
            "New game started (local color: %s)",
            "both" if local_color is None else local_color,
        )
        for cb in self.events.on_new_game:
            cb(local_color)
        self._emit_phase(GamePhase.AWAITING_MOVE)

    def submit_move(self, from_sq: tuple[int, int], to_sq: tuple[int, int]) -> bool:
        if not self.accepts_input:
            return False

        move = self._state.commit_move(from_sq, to_sq)
        if move is None:
            return False

        self._emit_move(move)
        self._emit_outbound(MoveMessage(move.from_sq, move.to_sq))
        self._after_commit()
        return True

    def receive_message(self, data: Any) -> bool:
        try:
            message = decode_message(data)
        except ValueError as exc:
            _LOGGER.warning("Ignoring malformed relay payload: %s", exc)
            return False

        if isinstance(message, MoveMessage):
            return self._apply_remote_move(message)
        if isinstance(message, GameInitMessage):
            self.new_game(message.guest_color)
            return True
        if self._local_color is None and self._state.phase == GamePhase.NOT_STARTED:
            _LOGGER.warning("Ignoring new-game request before game-init")
            return False
        self._reset_with_swapped_colors()
        return True

    # ── Peer lifecycle ───────────────────────────────────────────────────

    def host_game(self) -> None:
        """Start as host: play white and tell the guest its colour."""
        self.new_game(Color.WHITE)
        self._emit_outbound(GameInitMessage(Color.WHITE, Color.BLACK))

    def request_new_game(self) -> None:
        """Local new-game request; the peer receives the same signal."""
        self._emit_outbound(NewGameMessage())
        self._reset_with_swapped_colors()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _apply_remote_move(self, message: MoveMessage) -> bool:
        if self._state.phase != GamePhase.AWAITING_MOVE or self.is_local_turn:
            _LOGGER.warning(
                "Ignoring remote move %s -> %s out of turn", message.from_sq, message.to_sq
            )
            return False

        move = self._state.commit_move(message.from_sq, message.to_sq)
        if move is None:
            _LOGGER.warning(
                "Remote move %s -> %s rejected as illegal", message.from_sq, message.to_sq
            )
            return False

        self._emit_move(move)
        self._after_commit()
        return True

    def _reset_with_swapped_colors(self) -> None:
        color = self._local_color.opposite if self._local_color is not None else None
        self.new_game(color)

    def _after_commit(self) -> None:
        if self._state.is_game_over:
            self._emit_game_over(self._state.result, self._state.end_reason)

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._state)

    def _emit_outbound(self, message: RelayMessage) -> None:
        payload = encode_message(message)
        for cb in self.events.on_outbound:
            cb(payload)

    def _emit_game_over(self, result: GameResult, reason: GameEndReason) -> None:
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(result, reason)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
