"""High-level chess rules: checkmate, stalemate, draw detection."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessref.core.enums import Color, GameEndReason, GameResult, PieceType
from chessref.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessref.core.position import Position

FIFTY_MOVE_HALFMOVES = 100  # 100 half-moves = 50 full moves
REPETITION_COUNT = 3

_MINOR_PIECES = (PieceType.BISHOP, PieceType.KNIGHT)


@dataclass(frozen=True, slots=True)
class Verdict:
    """Result of evaluating a position (or of a resignation / timeout)."""

    result: GameResult = GameResult.IN_PROGRESS
    reason: GameEndReason | None = None
    check: bool = False  # advisory: side to move is in check

    @property
    def is_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    @property
    def winner(self) -> Color | None:
        if self.result == GameResult.WHITE_WINS:
            return Color.WHITE
        if self.result == GameResult.BLACK_WINS:
            return Color.BLACK
        return None

    @classmethod
    def ongoing(cls, check: bool = False) -> Verdict:
        return cls(GameResult.IN_PROGRESS, None, check)

    @classmethod
    def win_for(cls, color: Color, reason: GameEndReason) -> Verdict:
        result = GameResult.WHITE_WINS if color == Color.WHITE else GameResult.BLACK_WINS
        return cls(result, reason, reason == GameEndReason.CHECKMATE)

    @classmethod
    def draw(cls, reason: GameEndReason, check: bool = False) -> Verdict:
        return cls(GameResult.DRAW, reason, check)


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Repetition is judged on board occupancy alone: side to move, castling
    flags and the en passant target are not part of the fingerprint.
    """

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move) and not gen.has_legal_move()

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        gen = MoveGenerator(position)
        return not gen.is_in_check(position.side_to_move) and not gen.has_legal_move()

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-color bishops)."""
        pieces = list(position.board.occupied())
        total = len(pieces)

        # K vs K
        if total <= 2:
            return True

        others = [(sq, p) for sq, p in pieces if p.piece_type != PieceType.KING]

        # K+minor vs K
        if total == 3:
            return len(others) == 1 and others[0][1].piece_type in _MINOR_PIECES

        # K+B vs K+B with same-colour bishops
        if total == 4 and len(others) == 2:
            (first_sq, first), (second_sq, second) = others
            if (
                first.piece_type == PieceType.BISHOP
                and second.piece_type == PieceType.BISHOP
                and first.color != second.color
            ):
                return first_sq.is_light == second_sq.is_light

        return False

    @staticmethod
    def is_fifty_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= FIFTY_MOVE_HALFMOVES

    @staticmethod
    def repetition_count(position: Position, history: Sequence[str]) -> int:
        """How many times the current board occurs in *history*."""
        return history.count(position.board.fingerprint())

    @staticmethod
    def is_threefold_repetition(position: Position, history: Sequence[str]) -> bool:
        return Rules.repetition_count(position, history) >= REPETITION_COUNT

    @staticmethod
    def evaluate(position: Position, history: Sequence[str] = ()) -> Verdict:
        """Determine the verdict for the side to move.

        Precedence: checkmate, stalemate, insufficient material, threefold
        repetition, fifty-move rule.
        """
        gen = MoveGenerator(position)
        in_check = gen.is_in_check(position.side_to_move)

        if not gen.has_legal_move():
            if in_check:
                return Verdict.win_for(
                    position.side_to_move.opposite, GameEndReason.CHECKMATE
                )
            return Verdict.draw(GameEndReason.STALEMATE)

        if Rules.is_insufficient_material(position):
            return Verdict.draw(GameEndReason.INSUFFICIENT_MATERIAL, in_check)

        if Rules.is_threefold_repetition(position, history):
            return Verdict.draw(GameEndReason.THREEFOLD_REPETITION, in_check)

        if Rules.is_fifty_move_rule(position):
            return Verdict.draw(GameEndReason.FIFTY_MOVE_RULE, in_check)

        return Verdict.ongoing(in_check)

    @staticmethod
    def game_result(position: Position, history: Sequence[str] = ()) -> GameResult:
        """Determine the current game result."""
        return Rules.evaluate(position, history).result
