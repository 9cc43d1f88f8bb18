"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chessref.core import (
        STARTING_FEN, MoveGenerator, Rules, parse_square, position_from_fen,
    )

    pos = position_from_fen(STARTING_FEN)
    gen = MoveGenerator(pos)
    assert gen.is_legal_move(parse_square("e2"), parse_square("e4"))
    pos, move = pos.apply_move(parse_square("e2"), parse_square("e4"))
    print(move, Rules.evaluate(pos))
"""

from chessref.core.attacks import attacks_square, is_square_attacked
from chessref.core.board import Board
from chessref.core.castling import CastlingRights
from chessref.core.enums import CastlingSide, Color, GameEndReason, GameResult, PieceType
from chessref.core.move import Move
from chessref.core.move_generator import MoveGenerator, is_in_check, is_legal_move
from chessref.core.movement import geometrically_legal
from chessref.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chessref.core.piece import Piece
from chessref.core.position import PROMOTION_TYPES, Position
from chessref.core.rules import Rules, Verdict
from chessref.core.types import Square, parse_square, square_name

__all__ = [
    # Enums
    "CastlingSide",
    "Color",
    "GameEndReason",
    "GameResult",
    "PieceType",
    # Types / helpers
    "Square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "CastlingRights",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "PROMOTION_TYPES",
    "Rules",
    "Verdict",
    # Rule functions
    "attacks_square",
    "geometrically_legal",
    "is_in_check",
    "is_legal_move",
    "is_square_attacked",
    # Notation
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
]
