"""Attack detection.

Attack shape differs from move shape in two places: a pawn attacks its two
forward diagonals whether or not anything stands there, and a king attacks
its neighbours without asking whether it could survive on them. Nothing in
this module consults move legality, so check detection cannot recurse.
"""

from __future__ import annotations

from chessref.core.board import Board
from chessref.core.enums import Color, PieceType
from chessref.core.movement import MOVE_RULES, is_pawn_diagonal
from chessref.core.types import Square


def attacks_square(board: Board, from_sq: Square, target: Square) -> bool:
    """Whether the piece on *from_sq* attacks *target*."""
    if from_sq == target:
        return False
    piece = board[from_sq]
    if piece is None:
        return False
    if piece.piece_type == PieceType.PAWN:
        return is_pawn_diagonal(piece.color, from_sq, target)
    return MOVE_RULES[piece.piece_type](board, from_sq, target)


def is_square_attacked(board: Board, square: Square, by_color: Color) -> bool:
    """Is *square* attacked by any piece of *by_color*?"""
    for from_sq, piece in board.occupied():
        if piece.color == by_color and attacks_square(board, from_sq, square):
            return True
    return False
