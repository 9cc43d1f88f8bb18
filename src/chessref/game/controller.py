"""GameController: the boundary the UI, promotion prompt and clock talk to.

Validates proposals, suspends promotions until a piece is chosen, ends the
game on mate, draw, resignation or timeout, and moves the review cursor.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessref.core.board import Board
from chessref.core.enums import Color, GameEndReason, PieceType
from chessref.core.move import Move
from chessref.core.move_generator import MoveGenerator
from chessref.core.notation import position_from_fen
from chessref.core.position import PROMOTION_TYPES
from chessref.core.rules import Verdict
from chessref.core.types import Square
from chessref.game.interfaces import (
    GamePhase,
    IGameController,
    MoveOutcome,
    PendingPromotion,
    PromotionNotPendingError,
    PromotionOutcome,
)
from chessref.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, GameState], None]
CheckCallback = Callable[[Color], None]  # side now in check
GameOverCallback = Callable[[Verdict], None]
PhaseCallback = Callable[[GamePhase], None]
CursorCallback = Callable[[int], None]
PromotionCallback = Callable[[PendingPromotion], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_check: list[CheckCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_cursor_changed: list[CursorCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Owns the single live :class:`GameState` of one game.

    Methods are meant to be called from one thread; each call runs to
    completion before the next input is accepted.
    """

    __slots__ = ("_state", "_phase", "_pending", "events")

    def __init__(self) -> None:
        self._state = GameState.initial()
        self._phase = GamePhase.NOT_STARTED
        self._pending: PendingPromotion | None = None
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def verdict(self) -> Verdict:
        return self._state.verdict

    @property
    def pending_promotion(self) -> PendingPromotion | None:
        return self._pending

    @property
    def displayed_board(self) -> Board:
        """Board at the review cursor (the live board unless reviewing)."""
        return self._state.displayed_board

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> GameState:
        if fen is None:
            self._state = GameState.initial()
        else:
            self._state = GameState.from_position(position_from_fen(fen))
        self._pending = None
        _LOGGER.debug("New game started (fen=%s)", fen)

        if self._state.is_game_over:
            self._set_phase(GamePhase.GAME_OVER)
            self._emit_game_over(self._state.verdict)
        else:
            self._set_phase(GamePhase.AWAITING_MOVE)
        return self._state

    def propose_move(self, from_sq: Square, to_sq: Square) -> MoveOutcome:
        if self._phase != GamePhase.AWAITING_MOVE:
            _LOGGER.debug("Move %s%s rejected in phase %s", from_sq, to_sq, self._phase.name)
            return self._rejected()
        if not self._state.is_live:
            _LOGGER.debug("Move %s%s rejected while reviewing history", from_sq, to_sq)
            return self._rejected()

        position = self._state.position
        if not MoveGenerator(position).is_legal_move(from_sq, to_sq):
            _LOGGER.debug("Illegal move %s%s", from_sq, to_sq)
            return self._rejected()

        if position.is_promotion(from_sq, to_sq):
            self._pending = PendingPromotion(from_sq, to_sq, position.side_to_move)
            self._set_phase(GamePhase.AWAITING_PROMOTION)
            for cb in self.events.on_promotion_required:
                cb(self._pending)
            return MoveOutcome(
                accepted=True,
                requires_promotion_choice=True,
                state=self._state,
                verdict=self._state.verdict,
            )

        self._commit(from_sq, to_sq)
        return MoveOutcome(
            accepted=True,
            requires_promotion_choice=False,
            state=self._state,
            verdict=self._state.verdict,
        )

    def complete_promotion(self, piece_type: PieceType) -> PromotionOutcome:
        pending = self._pending
        if pending is None:
            raise PromotionNotPendingError("No promotion is pending")
        if not isinstance(piece_type, PieceType) or piece_type not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {piece_type!r}")

        self._pending = None
        self._commit(pending.from_sq, pending.to_sq, piece_type)
        return PromotionOutcome(state=self._state, verdict=self._state.verdict)

    def resign(self, color: Color) -> Verdict:
        return self._end_by(color, GameEndReason.RESIGNATION)

    def report_timeout(self, color: Color) -> Verdict:
        return self._end_by(color, GameEndReason.TIMEOUT)

    def set_cursor(self, index: int) -> int:
        if self._pending is not None:
            return self._state.cursor
        state = self._state.with_cursor(index)
        if state is not self._state:
            self._state = state
            _LOGGER.debug("Cursor moved to %d of %d", state.cursor, state.ply_count)
            for cb in self.events.on_cursor_changed:
                cb(state.cursor)
        return self._state.cursor

    def undo(self) -> bool:
        before = self._state.cursor
        return self.set_cursor(before - 1) != before

    def redo(self) -> bool:
        before = self._state.cursor
        return self.set_cursor(before + 1) != before

    def is_in_check(self, color: Color) -> bool:
        return MoveGenerator(self._state.position).is_in_check(color)

    # ── Query helpers ────────────────────────────────────────────────────

    def legal_moves(self) -> list[tuple[Square, Square]]:
        """Legal moves in the live position."""
        if self._phase != GamePhase.AWAITING_MOVE:
            return []
        return MoveGenerator(self._state.position).generate_legal_moves()

    def legal_destinations(self, from_sq: Square) -> list[Square]:
        """Legal targets for the piece on *from_sq*, for move hints."""
        if self._phase != GamePhase.AWAITING_MOVE:
            return []
        return MoveGenerator(self._state.position).legal_destinations(from_sq)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _commit(
        self, from_sq: Square, to_sq: Square, promotion: PieceType | None = None
    ) -> None:
        self._state = self._state.apply_move(from_sq, to_sq, promotion)
        move = self._state.move_log[-1]
        for cb in self.events.on_move:
            cb(move, self._state)

        verdict = self._state.verdict
        if verdict.is_over:
            _LOGGER.info(
                "Game over after %s: %s (%s)",
                move,
                verdict.result.name,
                verdict.reason.name if verdict.reason else "-",
            )
            self._set_phase(GamePhase.GAME_OVER)
            self._emit_game_over(verdict)
            return

        self._set_phase(GamePhase.AWAITING_MOVE)
        if verdict.check:
            for cb in self.events.on_check:
                cb(self._state.side_to_move)

    def _end_by(self, loser: Color, reason: GameEndReason) -> Verdict:
        if self._phase in (GamePhase.NOT_STARTED, GamePhase.GAME_OVER):
            return self._state.verdict
        self._pending = None
        self._state = self._state.with_end(loser, reason)
        _LOGGER.info("%s loses by %s", loser, reason.name.lower())
        self._set_phase(GamePhase.GAME_OVER)
        self._emit_game_over(self._state.verdict)
        return self._state.verdict

    def _rejected(self) -> MoveOutcome:
        return MoveOutcome(
            accepted=False,
            requires_promotion_choice=False,
            state=self._state,
            verdict=self._state.verdict,
        )

    def _set_phase(self, phase: GamePhase) -> None:
        if phase == self._phase:
            return
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_game_over(self, verdict: Verdict) -> None:
        for cb in self.events.on_game_over:
            cb(verdict)
