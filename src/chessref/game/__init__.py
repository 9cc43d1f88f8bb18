"""Game management layer: state snapshots, controller, phase machine.

Quick start::

    from chessref.core import parse_square
    from chessref.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    outcome = ctrl.propose_move(parse_square("e2"), parse_square("e4"))
    assert outcome.accepted
"""

from chessref.game.controller import GameController, GameEvents
from chessref.game.interfaces import (
    GamePhase,
    IGameController,
    MoveOutcome,
    PendingPromotion,
    PromotionNotPendingError,
    PromotionOutcome,
)
from chessref.game.state import GameState

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    "MoveOutcome",
    "PendingPromotion",
    "PromotionNotPendingError",
    "PromotionOutcome",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
]
