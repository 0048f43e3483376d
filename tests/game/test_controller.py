"""Tests for GameController — the peer-side orchestrator."""

import logging
from typing import Any

import pytest

from peerchess.core.enums import Color, GameResult
from peerchess.core.types import E2, E4, E5, E7, parse_square
from peerchess.game.controller import GameController
from peerchess.game.interfaces import GameEndReason, GamePhase


def _move_payload(move: str) -> dict[str, Any]:
    from_sq = parse_square(move[:2])
    to_sq = parse_square(move[2:])
    return {
        "type": "move",
        "move": {
            "from": {"row": from_sq.row, "col": from_sq.col},
            "to": {"row": to_sq.row, "col": to_sq.col},
        },
    }


def _outbox(ctrl: GameController) -> list[dict[str, Any]]:
    sent: list[dict[str, Any]] = []
    ctrl.events.on_outbound.append(sent.append)
    return sent


def _link(a: GameController, b: GameController) -> None:
    """Deliver each controller's outbound payloads to the other."""
    a.events.on_outbound.append(b.receive_message)
    b.events.on_outbound.append(a.receive_message)


class TestNewGame:
    def test_not_started_rejects_moves(self) -> None:
        ctrl = GameController()
        assert ctrl.state.phase == GamePhase.NOT_STARTED
        assert not ctrl.submit_move(E2, E4)

    def test_phase_awaiting(self) -> None:
        ctrl = GameController()
        phases: list[GamePhase] = []
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.new_game()
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE
        assert phases == [GamePhase.AWAITING_MOVE]

    def test_new_game_discards_state(self) -> None:
        ctrl = GameController()
        ctrl.new_game()
        ctrl.submit_move(E2, E4)
        old_state = ctrl.state
        ctrl.new_game()
        assert ctrl.state is not old_state
        assert ctrl.state.ply_count == 0


class TestLocalMoves:
    def test_hot_seat_both_sides(self) -> None:
        ctrl = GameController()
        ctrl.new_game()
        assert ctrl.submit_move(E2, E4)
        assert ctrl.submit_move(E7, E5)
        assert ctrl.state.side_to_move == Color.WHITE

    def test_illegal_move_rejected(self) -> None:
        ctrl = GameController()
        ctrl.new_game()
        sent = _outbox(ctrl)
        assert not ctrl.submit_move(E2, E5)
        assert ctrl.state.side_to_move == Color.WHITE
        assert sent == []

    def test_move_relayed_outbound(self) -> None:
        ctrl = GameController()
        ctrl.new_game(Color.WHITE)
        sent = _outbox(ctrl)
        moves: list[str] = []
        ctrl.events.on_move.append(lambda m, st: moves.append(str(m)))
        assert ctrl.submit_move(E2, E4)
        assert sent == [_move_payload("e2e4")]
        assert moves == ["e2e4"]

    def test_not_your_turn(self) -> None:
        ctrl = GameController()
        ctrl.new_game(Color.BLACK)
        assert not ctrl.accepts_input
        assert not ctrl.submit_move(E2, E4)
        assert ctrl.state.ply_count == 0

    def test_game_over_event_on_checkmate(self) -> None:
        ctrl = GameController()
        ctrl.new_game()
        results: list[tuple[GameResult, GameEndReason]] = []
        ctrl.events.on_game_over.append(lambda r, why: results.append((r, why)))
        for move in ("f2f3", "e7e5", "g2g4", "d8h4"):
            assert ctrl.submit_move(parse_square(move[:2]), parse_square(move[2:]))
        assert results == [(GameResult.BLACK_WINS, GameEndReason.CHECKMATE)]
        assert ctrl.state.phase == GamePhase.GAME_OVER

    def test_cannot_submit_after_game_over(self) -> None:
        ctrl = GameController()
        ctrl.new_game()
        for move in ("f2f3", "e7e5", "g2g4", "d8h4"):
            ctrl.submit_move(parse_square(move[:2]), parse_square(move[2:]))
        assert not ctrl.accepts_input
        assert not ctrl.submit_move(parse_square("a2"), parse_square("a3"))


class TestRemoteMessages:
    def test_remote_move_applied(self) -> None:
        ctrl = GameController()
        ctrl.new_game(Color.BLACK)
        sent = _outbox(ctrl)
        assert ctrl.receive_message(_move_payload("e2e4"))
        assert ctrl.state.side_to_move == Color.BLACK
        assert ctrl.accepts_input
        assert sent == []

    def test_remote_move_out_of_turn(self, caplog: pytest.LogCaptureFixture) -> None:
        ctrl = GameController()
        ctrl.new_game(Color.WHITE)
        with caplog.at_level(logging.WARNING, logger="peerchess.game.controller"):
            assert not ctrl.receive_message(_move_payload("e2e4"))
        assert "out of turn" in caplog.text
        assert ctrl.state.ply_count == 0

    def test_illegal_remote_move(self, caplog: pytest.LogCaptureFixture) -> None:
        ctrl = GameController()
        ctrl.new_game(Color.BLACK)
        with caplog.at_level(logging.WARNING, logger="peerchess.game.controller"):
            assert not ctrl.receive_message(_move_payload("e2e5"))
        assert "rejected" in caplog.text

    def test_malformed_payload(self, caplog: pytest.LogCaptureFixture) -> None:
        ctrl = GameController()
        ctrl.new_game(Color.BLACK)
        with caplog.at_level(logging.WARNING, logger="peerchess.game.controller"):
            assert not ctrl.receive_message({"type": "teleport"})
        assert "malformed" in caplog.text

    def test_game_init_assigns_guest_color(self) -> None:
        ctrl = GameController()
        colors: list[Color | None] = []
        ctrl.events.on_new_game.append(colors.append)
        assert ctrl.receive_message(
            {"type": "game-init", "hostColor": "white", "guestColor": "black"}
        )
        assert ctrl.local_color == Color.BLACK
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE
        assert colors == [Color.BLACK]

    def test_new_game_swaps_colors(self) -> None:
        ctrl = GameController()
        ctrl.new_game(Color.BLACK)
        ctrl.receive_message(_move_payload("e2e4"))
        assert ctrl.receive_message({"type": "new-game"})
        assert ctrl.local_color == Color.WHITE
        assert ctrl.state.ply_count == 0

    def test_new_game_before_init_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        ctrl = GameController()
        with caplog.at_level(logging.WARNING, logger="peerchess.game.controller"):
            assert not ctrl.receive_message({"type": "new-game"})
        assert "before game-init" in caplog.text
        assert ctrl.state.phase == GamePhase.NOT_STARTED
        assert not ctrl.submit_move(E2, E4)

    def test_new_game_keeps_hot_seat(self) -> None:
        ctrl = GameController()
        ctrl.new_game()
        ctrl.receive_message({"type": "new-game"})
        assert ctrl.local_color is None


class TestPeerLifecycle:
    def test_host_game_sends_init(self) -> None:
        ctrl = GameController()
        sent = _outbox(ctrl)
        ctrl.host_game()
        assert ctrl.local_color == Color.WHITE
        assert sent == [{"type": "game-init", "hostColor": "white", "guestColor": "black"}]

    def test_request_new_game(self) -> None:
        ctrl = GameController()
        ctrl.new_game(Color.WHITE)
        ctrl.submit_move(E2, E4)
        sent = _outbox(ctrl)
        ctrl.request_new_game()
        assert sent == [{"type": "new-game"}]
        assert ctrl.local_color == Color.BLACK
        assert ctrl.state.ply_count == 0

    def test_two_peers_stay_in_sync(self) -> None:
        host = GameController()
        guest = GameController()
        _link(host, guest)

        host.host_game()
        assert guest.local_color == Color.BLACK

        for move in ("e2e4", "e7e5", "g1f3", "b8c6"):
            mover = host if host.accepts_input else guest
            assert mover.submit_move(parse_square(move[:2]), parse_square(move[2:]))
            assert host.state.position.board == guest.state.position.board
        assert host.state.ply_count == guest.state.ply_count == 4

    def test_two_peers_new_game(self) -> None:
        host = GameController()
        guest = GameController()
        _link(host, guest)
        host.host_game()
        host.submit_move(E2, E4)

        guest.request_new_game()
        assert guest.local_color == Color.WHITE
        assert host.local_color == Color.BLACK
        assert host.state.ply_count == guest.state.ply_count == 0

    def test_both_peers_see_checkmate(self) -> None:
        host = GameController()
        guest = GameController()
        _link(host, guest)
        endings: list[GameResult] = []
        host.events.on_game_over.append(lambda r, _why: endings.append(r))
        guest.events.on_game_over.append(lambda r, _why: endings.append(r))
        host.host_game()

        for move in ("f2f3", "e7e5", "g2g4", "d8h4"):
            mover = host if host.accepts_input else guest
            mover.submit_move(parse_square(move[:2]), parse_square(move[2:]))

        assert endings == [GameResult.BLACK_WINS, GameResult.BLACK_WINS]
        assert host.state.is_checkmate() and guest.state.is_checkmate()
