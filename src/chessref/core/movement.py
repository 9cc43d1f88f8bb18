"""Per-piece geometric move rules.

These rules ignore check and turn ownership: they only answer "could this
piece travel from A to B on this board". The legality evaluator layers king
safety, pawn capture occupancy, en passant and castling on top.
"""

from __future__ import annotations

from collections.abc import Callable

from chessref.core.board import Board
from chessref.core.enums import Color, PieceType
from chessref.core.types import Square

MoveRule = Callable[[Board, Square, Square], bool]

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)


# -- Pawn geometry ---------------------------------------------------------


def pawn_direction(color: Color) -> int:
    """Row delta of a single pawn step (white moves toward row 0)."""
    return -1 if color == Color.WHITE else 1


def pawn_start_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def promotion_row(color: Color) -> int:
    """The far row a pawn of *color* promotes on."""
    return 0 if color == Color.WHITE else 7


def is_pawn_diagonal(color: Color, from_sq: Square, to_sq: Square) -> bool:
    """Diagonal-forward-by-one, the pawn's capture (and attack) shape."""
    return (
        to_sq.row - from_sq.row == pawn_direction(color)
        and abs(to_sq.col - from_sq.col) == 1
    )


# -- Helpers ---------------------------------------------------------------


def _path_is_clear(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Whether every square strictly between two aligned squares is empty."""
    row_step = (to_sq.row > from_sq.row) - (to_sq.row < from_sq.row)
    col_step = (to_sq.col > from_sq.col) - (to_sq.col < from_sq.col)
    row, col = from_sq.row + row_step, from_sq.col + col_step
    while (row, col) != (to_sq.row, to_sq.col):
        if not board.is_empty(Square(row, col)):
            return False
        row += row_step
        col += col_step
    return True


# -- Rules per piece type --------------------------------------------------


def pawn_move(board: Board, from_sq: Square, to_sq: Square) -> bool:
    pawn = board[from_sq]
    if pawn is None:
        return False
    color = pawn.color
    step = pawn_direction(color)

    if from_sq.col == to_sq.col:
        if to_sq.row == from_sq.row + step:
            return board.is_empty(to_sq)
        if from_sq.row == pawn_start_row(color) and to_sq.row == from_sq.row + 2 * step:
            middle = Square(from_sq.row + step, from_sq.col)
            return board.is_empty(middle) and board.is_empty(to_sq)
        return False

    # Capture occupancy and en passant are decided by the evaluator.
    return is_pawn_diagonal(color, from_sq, to_sq)


def knight_move(board: Board, from_sq: Square, to_sq: Square) -> bool:
    delta = (to_sq.row - from_sq.row, to_sq.col - from_sq.col)
    return delta in KNIGHT_OFFSETS


def bishop_move(board: Board, from_sq: Square, to_sq: Square) -> bool:
    if abs(to_sq.row - from_sq.row) != abs(to_sq.col - from_sq.col):
        return False
    return _path_is_clear(board, from_sq, to_sq)


def rook_move(board: Board, from_sq: Square, to_sq: Square) -> bool:
    if from_sq.row != to_sq.row and from_sq.col != to_sq.col:
        return False
    return _path_is_clear(board, from_sq, to_sq)


def queen_move(board: Board, from_sq: Square, to_sq: Square) -> bool:
    return rook_move(board, from_sq, to_sq) or bishop_move(board, from_sq, to_sq)


def king_move(board: Board, from_sq: Square, to_sq: Square) -> bool:
    return abs(to_sq.row - from_sq.row) <= 1 and abs(to_sq.col - from_sq.col) <= 1


MOVE_RULES: dict[PieceType, MoveRule] = {
    PieceType.PAWN: pawn_move,
    PieceType.KNIGHT: knight_move,
    PieceType.BISHOP: bishop_move,
    PieceType.ROOK: rook_move,
    PieceType.QUEEN: queen_move,
    PieceType.KING: king_move,
}


def geometrically_legal(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Whether the piece on *from_sq* has the right shape to reach *to_sq*."""
    if from_sq == to_sq:
        return False
    piece = board[from_sq]
    if piece is None:
        return False
    return MOVE_RULES[piece.piece_type](board, from_sq, to_sq)
