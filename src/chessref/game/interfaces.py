"""Abstract interfaces and boundary records for the game layer.

Collaborators (board view, promotion prompt, clock, move list) depend on
these types, not on the concrete :class:`GameController`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessref.core.enums import Color, PieceType

if TYPE_CHECKING:
    from chessref.core.rules import Verdict
    from chessref.core.types import Square
    from chessref.game.state import GameState


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()  # a pawn reached the far row, kind not chosen
    GAME_OVER = auto()


class PromotionNotPendingError(RuntimeError):
    """Raised when a promotion choice arrives with no promotion pending."""


# ── Boundary records ─────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A validated pawn move waiting for its promotion piece."""

    from_sq: Square
    to_sq: Square
    color: Color


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Answer to a move proposal."""

    accepted: bool
    requires_promotion_choice: bool
    state: GameState
    verdict: Verdict


@dataclass(frozen=True, slots=True)
class PromotionOutcome:
    """Answer to a completed promotion choice."""

    state: GameState
    verdict: Verdict


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self, fen: str | None = None) -> GameState:
        """Set up a new game (standard start unless *fen* is given)."""

    @abstractmethod
    def propose_move(self, from_sq: Square, to_sq: Square) -> MoveOutcome:
        """Validate and, if legal, apply a move."""

    @abstractmethod
    def complete_promotion(self, piece_type: PieceType) -> PromotionOutcome:
        """Finish a pending promotion with the chosen piece type."""

    @abstractmethod
    def resign(self, color: Color) -> Verdict:
        """Player of *color* resigns."""

    @abstractmethod
    def report_timeout(self, color: Color) -> Verdict:
        """The clock reports that *color* ran out of time."""

    @abstractmethod
    def set_cursor(self, index: int) -> int:
        """Show the position after *index* moves; returns the clamped index."""

    @abstractmethod
    def undo(self) -> bool:
        """Step the cursor back one move. Returns True if it moved."""

    @abstractmethod
    def redo(self) -> bool:
        """Step the cursor forward one move. Returns True if it moved."""

    @abstractmethod
    def is_in_check(self, color: Color) -> bool:
        """Whether *color*'s king is attacked in the live position."""
