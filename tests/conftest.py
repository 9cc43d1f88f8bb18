"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chessref.core.types import parse_square
from chessref.game.controller import GameController
from chessref.game.interfaces import MoveOutcome


@pytest.fixture
def controller() -> GameController:
    """A controller with a fresh standard game already started."""
    ctrl = GameController()
    ctrl.new_game()
    return ctrl


@pytest.fixture
def play() -> Callable[..., list[MoveOutcome]]:
    """Propose a series of UCI-style moves ("e2e4") and collect the outcomes."""

    def _play(ctrl: GameController, *moves: str) -> list[MoveOutcome]:
        return [
            ctrl.propose_move(parse_square(uci[:2]), parse_square(uci[2:4]))
            for uci in moves
        ]

    return _play
