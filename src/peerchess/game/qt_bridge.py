"""Qt bridge exposing a GameController through signals and slots."""

from __future__ import annotations

from typing import Any

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from peerchess.core.enums import GameResult
from peerchess.core.move import Move
from peerchess.core.types import Square
from peerchess.game.controller import GameController
from peerchess.game.interfaces import GameEndReason, GamePhase
from peerchess.game.state import GameState


class GameSessionWorker(QObject):
    """Main-thread adapter between the widgets, the transport and the rules.

    Board widgets call the slots; the transport connects
    ``outbound_message`` to its send routine and feeds received payloads to
    :meth:`receive_message`.
    """

    move_committed = pyqtSignal(object)  # Move
    move_rejected = pyqtSignal(object, object)  # from_sq, to_sq
    game_over = pyqtSignal(int, int)  # GameResult, GameEndReason
    phase_changed = pyqtSignal(int)  # GamePhase
    outbound_message = pyqtSignal(object)  # relay payload dict
    new_game_started = pyqtSignal(object)  # local Color or None

    __slots__ = ("_controller",)

    def __init__(
        self,
        controller: GameController | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller if controller is not None else GameController()
        events = self._controller.events
        events.on_move.append(self._on_move)
        events.on_game_over.append(self._on_game_over)
        events.on_phase_changed.append(self._on_phase_changed)
        events.on_outbound.append(self.outbound_message.emit)
        events.on_new_game.append(self.new_game_started.emit)

    @property
    def controller(self) -> GameController:
        return self._controller

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot(object, object, result=bool)
    def submit_move(self, from_sq: tuple[int, int], to_sq: tuple[int, int]) -> bool:
        """Local user picked a destination for the selected piece."""
        ok = self._controller.submit_move(from_sq, to_sq)
        if not ok:
            self.move_rejected.emit(from_sq, to_sq)
        return ok

    @pyqtSlot(object, result=bool)
    def receive_message(self, data: Any) -> bool:
        return self._controller.receive_message(data)

    @pyqtSlot()
    def host_game(self) -> None:
        self._controller.host_game()

    @pyqtSlot()
    def request_new_game(self) -> None:
        self._controller.request_new_game()

    def legal_destinations(self, sq: tuple[int, int]) -> list[Square]:
        """Squares to highlight for the selected piece (empty if not our turn)."""
        if not self._controller.accepts_input:
            return []
        return self._controller.state.legal_destinations(sq)

    # ── Controller callbacks ─────────────────────────────────────────────

    def _on_move(self, move: Move, _state: GameState) -> None:
        self.move_committed.emit(move)

    def _on_game_over(self, result: GameResult, reason: GameEndReason) -> None:
        self.game_over.emit(int(result), int(reason))

    def _on_phase_changed(self, phase: GamePhase) -> None:
        self.phase_changed.emit(int(phase))
