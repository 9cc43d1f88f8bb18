"""Position: rules-relevant game snapshot with a pure move transition."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from chessref.core.board import Board
from chessref.core.castling import CastlingRights
from chessref.core.enums import Color, PieceType
from chessref.core.move import Move
from chessref.core.movement import is_pawn_diagonal, promotion_row
from chessref.core.piece import Piece
from chessref.core.types import Square

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass(frozen=True, slots=True)
class Position:
    """Board + side to move + castling flags + en passant target + clocks.

    Positions are values: :meth:`apply_move` returns a new ``Position`` and
    never touches the one it was called on.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    en_passant: Square | None = None
    castling: CastlingRights = field(default_factory=CastlingRights)
    halfmove_clock: int = 0
    fullmove_number: int = 1

    @classmethod
    def initial(cls) -> Position:
        return cls()

    # ── Move classification ──────────────────────────────────────────────

    def is_castle(self, from_sq: Square, to_sq: Square) -> bool:
        """A king moving two columns along its row."""
        piece = self.board[from_sq]
        return (
            piece is not None
            and piece.piece_type == PieceType.KING
            and from_sq.row == to_sq.row
            and abs(to_sq.col - from_sq.col) == 2
        )

    def is_en_passant(self, from_sq: Square, to_sq: Square) -> bool:
        """A pawn taking the enemy pawn beside it via the en passant target."""
        piece = self.board[from_sq]
        return (
            piece is not None
            and piece.piece_type == PieceType.PAWN
            and to_sq == self.en_passant
            and self.board.is_empty(to_sq)
            and is_pawn_diagonal(piece.color, from_sq, to_sq)
            and self.board[Square(from_sq.row, to_sq.col)]
            == Piece(piece.color.opposite, PieceType.PAWN)
        )

    def is_promotion(self, from_sq: Square, to_sq: Square) -> bool:
        """A pawn arriving on its far row."""
        piece = self.board[from_sq]
        return (
            piece is not None
            and piece.piece_type == PieceType.PAWN
            and to_sq.row == promotion_row(piece.color)
        )

    # ── Transition ───────────────────────────────────────────────────────

    def apply_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> tuple[Position, Move]:
        """Play an already-validated move; return the next position and its record.

        Raises:
            ValueError: no piece on *from_sq*, or a promotion move without a
                valid promotion piece type.
        """
        piece = self.board[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {from_sq}")

        is_promotion = self.is_promotion(from_sq, to_sq)
        if is_promotion and promotion not in PROMOTION_TYPES:
            raise ValueError(f"Invalid promotion piece for {from_sq}{to_sq}: {promotion!r}")
        if not is_promotion:
            promotion = None

        is_castle = self.is_castle(from_sq, to_sq)
        is_en_passant = self.is_en_passant(from_sq, to_sq)

        changes: dict[Square, Piece | None] = {from_sq: None}
        captured = self.board[to_sq]

        # En passant: the captured pawn sits beside the mover, not on to_sq
        if is_en_passant:
            victim_sq = Square(from_sq.row, to_sq.col)
            captured = self.board[victim_sq]
            changes[victim_sq] = None

        placed = piece
        if promotion is not None:
            placed = Piece(piece.color, promotion)
        changes[to_sq] = placed

        # Slide the rook over the square the king crossed
        if is_castle:
            kingside = to_sq.col > from_sq.col
            rook_from = Square(from_sq.row, 7 if kingside else 0)
            rook_to = Square(from_sq.row, (from_sq.col + to_sq.col) // 2)
            changes[rook_to] = self.board[rook_from]
            changes[rook_from] = None

        # En passant target for the opponent, valid for one ply only
        next_en_passant: Square | None = None
        if piece.piece_type == PieceType.PAWN and abs(to_sq.row - from_sq.row) == 2:
            next_en_passant = Square((from_sq.row + to_sq.row) // 2, from_sq.col)

        if piece.piece_type == PieceType.PAWN or captured is not None:
            halfmove_clock = 0
        else:
            halfmove_clock = self.halfmove_clock + 1

        fullmove_number = self.fullmove_number
        if self.side_to_move == Color.BLACK:
            fullmove_number += 1

        next_position = replace(
            self,
            board=self.board.replace(changes),
            side_to_move=self.side_to_move.opposite,
            en_passant=next_en_passant,
            castling=self.castling.after_move(piece, from_sq, to_sq),
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )
        record = Move(
            from_sq=from_sq,
            to_sq=to_sq,
            piece=piece,
            captured=captured,
            is_castle=is_castle,
            is_en_passant=is_en_passant,
            is_promotion=is_promotion,
            promoted_to=promotion,
        )
        return next_position, record
