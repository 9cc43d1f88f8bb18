"""Move legality, check detection and castling / en passant handling."""

from __future__ import annotations

from collections.abc import Iterator

from chessref.core.attacks import is_square_attacked
from chessref.core.board import Board
from chessref.core.castling import king_home, rook_home
from chessref.core.enums import CastlingSide, Color, PieceType
from chessref.core.movement import geometrically_legal, is_pawn_diagonal
from chessref.core.piece import Piece
from chessref.core.position import Position
from chessref.core.types import ALL_SQUARES, Square


class MoveGenerator:
    """Answers legality questions about a single :class:`Position`.

    Legality is "right shape, right occupancy, and the mover's king is safe
    afterwards". King safety is checked by playing the move on a throwaway
    board, which covers pins, discovered checks and check evasion without
    any pin-specific logic.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Check detection ----------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return _king_attacked(self._board, color)

    # -- Move legality ------------------------------------------------------

    def is_legal_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Whether the side to move may play *from_sq* → *to_sq*."""
        board = self._board
        piece = board[from_sq]
        if piece is None or piece.color != self._pos.side_to_move:
            return False
        target = board[to_sq]
        if target is not None and target.color == piece.color:
            return False

        if self._pos.is_castle(from_sq, to_sq):
            return self.is_castling_legal(from_sq, to_sq)

        if not geometrically_legal(board, from_sq, to_sq):
            return False

        en_passant = False
        if piece.piece_type == PieceType.PAWN and from_sq.col != to_sq.col:
            # Diagonal pawn moves must capture something
            if target is None:
                if not self._pos.is_en_passant(from_sq, to_sq):
                    return False
                en_passant = True

        return not _king_attacked(
            _simulate(board, piece, from_sq, to_sq, en_passant), piece.color
        )

    def is_castling_legal(self, from_sq: Square, to_sq: Square) -> bool:
        """Whether the king on *from_sq* may castle to *to_sq*."""
        board = self._board
        king = board[from_sq]
        if king is None or king.piece_type != PieceType.KING:
            return False
        color = king.color
        if color != self._pos.side_to_move:
            return False
        if from_sq.row != to_sq.row or abs(to_sq.col - from_sq.col) != 2:
            return False
        if from_sq != king_home(color):
            return False

        side = CastlingSide.KINGSIDE if to_sq.col > from_sq.col else CastlingSide.QUEENSIDE
        if not self._pos.castling.can_castle(color, side):
            return False

        rook_sq = rook_home(color, side)
        if board[rook_sq] != Piece(color, PieceType.ROOK):
            return False

        low, high = sorted((from_sq.col, rook_sq.col))
        for col in range(low + 1, high):
            if not board.is_empty(Square(from_sq.row, col)):
                return False

        # Only the squares the king stands on or crosses must be safe.
        transit = Square(from_sq.row, (from_sq.col + to_sq.col) // 2)
        opponent = color.opposite
        return not any(
            is_square_attacked(board, sq, opponent) for sq in (from_sq, transit, to_sq)
        )

    # -- Enumeration --------------------------------------------------------

    def generate_legal_moves(self) -> list[tuple[Square, Square]]:
        """All legal (from, to) pairs for the side to move.

        A promotion appears once; the piece choice is made separately.
        """
        return list(self._iter_legal_moves())

    def has_legal_move(self) -> bool:
        return next(self._iter_legal_moves(), None) is not None

    def legal_destinations(self, from_sq: Square) -> list[Square]:
        """Legal target squares for the piece on *from_sq*."""
        return [to_sq for to_sq in ALL_SQUARES if self.is_legal_move(from_sq, to_sq)]

    def _iter_legal_moves(self) -> Iterator[tuple[Square, Square]]:
        color = self._pos.side_to_move
        for from_sq, piece in self._board.occupied():
            if piece.color != color:
                continue
            for to_sq in ALL_SQUARES:
                if self.is_legal_move(from_sq, to_sq):
                    yield from_sq, to_sq


# -- Module-level conveniences ----------------------------------------------


def is_legal_move(position: Position, from_sq: Square, to_sq: Square) -> bool:
    return MoveGenerator(position).is_legal_move(from_sq, to_sq)


def is_in_check(position: Position, color: Color) -> bool:
    return MoveGenerator(position).is_in_check(color)


# -- Internals -------------------------------------------------------------


def _king_attacked(board: Board, color: Color) -> bool:
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)


def _simulate(
    board: Board,
    piece: Piece,
    from_sq: Square,
    to_sq: Square,
    en_passant: bool,
) -> Board:
    """Board after a non-castling move; the input board is left untouched."""
    changes: dict[Square, Piece | None] = {from_sq: None, to_sq: piece}
    if en_passant and is_pawn_diagonal(piece.color, from_sq, to_sq):
        changes[Square(from_sq.row, to_sq.col)] = None
    return board.replace(changes)
