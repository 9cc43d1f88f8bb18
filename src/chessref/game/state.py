"""Game state: live position, append-only history and review cursor."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from chessref.core.board import Board
from chessref.core.enums import Color, GameEndReason
from chessref.core.position import Position
from chessref.core.rules import Rules, Verdict

if TYPE_CHECKING:
    from chessref.core.castling import CastlingRights
    from chessref.core.enums import PieceType
    from chessref.core.move import Move
    from chessref.core.types import Square


@dataclass(frozen=True, slots=True)
class GameState:
    """Immutable snapshot of a whole game.

    ``position_history[i]`` is the board fingerprint after ``move_log[i]``;
    the start position is kept separately in ``start``. ``cursor`` selects
    which position a viewer is looking at (``0`` = start, ``len(move_log)``
    = live) and never changes the log itself.
    """

    start: Position = field(default_factory=Position.initial)
    position: Position = field(default_factory=Position.initial)
    position_history: tuple[str, ...] = ()
    move_log: tuple[Move, ...] = ()
    cursor: int = 0
    verdict: Verdict = field(default_factory=Verdict)

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def initial(cls) -> GameState:
        """Standard starting position, white to move, empty history."""
        return cls.from_position(Position.initial())

    @classmethod
    def from_position(cls, position: Position) -> GameState:
        return cls(
            start=position,
            position=position,
            verdict=Rules.evaluate(position),
        )

    # ── Transitions ──────────────────────────────────────────────────────

    def apply_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> GameState:
        """Play a legal move and return the next state.

        Caller is responsible for the legality check.
        """
        position, record = self.position.apply_move(from_sq, to_sq, promotion)
        history = self.position_history + (position.board.fingerprint(),)
        move_log = self.move_log + (record,)
        return replace(
            self,
            position=position,
            position_history=history,
            move_log=move_log,
            cursor=len(move_log),
            verdict=Rules.evaluate(position, history),
        )

    def with_cursor(self, index: int) -> GameState:
        """Same game viewed at *index* (clamped to the log bounds)."""
        index = max(0, min(index, len(self.move_log)))
        if index == self.cursor:
            return self
        return replace(self, cursor=index)

    def with_end(self, loser: Color, reason: GameEndReason) -> GameState:
        """Game ended by resignation or timeout of *loser*."""
        return replace(self, verdict=Verdict.win_for(loser.opposite, reason))

    # ── Live position ────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self.position.board

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def en_passant_target(self) -> Square | None:
        return self.position.en_passant

    @property
    def castling(self) -> CastlingRights:
        return self.position.castling

    @property
    def halfmove_clock(self) -> int:
        return self.position.halfmove_clock

    @property
    def is_game_over(self) -> bool:
        return self.verdict.is_over

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_log)

    # ── Review view ──────────────────────────────────────────────────────

    @property
    def is_live(self) -> bool:
        """Whether the cursor shows the authoritative position."""
        return self.cursor == len(self.move_log)

    def board_at(self, index: int) -> Board:
        """Board after *index* moves (``0`` is the start position)."""
        if not (0 <= index <= len(self.move_log)):
            raise IndexError(f"No position at index {index}")
        if index == len(self.move_log):
            return self.position.board
        if index == 0:
            return self.start.board
        return Board.from_placement(self.position_history[index - 1])

    @property
    def displayed_board(self) -> Board:
        return self.board_at(self.cursor)

    @property
    def displayed_side(self) -> Color:
        """Side to move in the displayed position."""
        if self.cursor % 2 == 0:
            return self.start.side_to_move
        return self.start.side_to_move.opposite
