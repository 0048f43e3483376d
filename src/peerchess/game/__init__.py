"""Game management layer — state machine, peer controller, relay payloads.

Quick start::

    from peerchess.game import GameController

    ctrl = GameController()
    ctrl.events.on_outbound.append(transport.send)
    ctrl.host_game()
    ctrl.submit_move((6, 4), (4, 4))
"""

from peerchess.game.controller import GameController, GameEvents
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

__all__ = [
    # Interfaces
    "GameEndReason",
    "GamePhase",
    "IGameController",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    # Relay
    "GameInitMessage",
    "MoveMessage",
    "NewGameMessage",
    "RelayMessage",
    "decode_message",
    "encode_message",
]
