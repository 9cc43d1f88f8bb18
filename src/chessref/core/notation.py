"""FEN parsing and serialization for setting up positions."""

from __future__ import annotations

from chessref.core.board import Board
from chessref.core.castling import CastlingRights
from chessref.core.enums import CastlingSide, Color, PieceType
from chessref.core.piece import Piece
from chessref.core.position import Position
from chessref.core.types import Square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, tuple[Color, CastlingSide]] = {
    "K": (Color.WHITE, CastlingSide.KINGSIDE),
    "Q": (Color.WHITE, CastlingSide.QUEENSIDE),
    "k": (Color.BLACK, CastlingSide.KINGSIDE),
    "q": (Color.BLACK, CastlingSide.QUEENSIDE),
}


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    A missing castling letter marks that rook as moved; a side with no
    castling letters at all has its king marked as moved.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement
    board = Board.from_placement(placement)

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    seen: set[str] = set()
    if castling_part != "-":
        for ch in castling_part:
            if ch not in _CASTLING_CHARS or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)

    castling = CastlingRights()
    for ch, (color, castling_side) in _CASTLING_CHARS.items():
        if ch not in seen:
            castling = castling.with_moved(color, castling_side)
    for color in Color:
        if not any(_CASTLING_CHARS[ch][0] == color for ch in seen):
            castling = castling.with_moved(color)

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        ep = parse_square(ep_part)
        expected_row = 2 if side == Color.WHITE else 5
        if ep.row != expected_row:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        victim = board[Square(ep.row + (1 if side == Color.WHITE else -1), ep.col)]
        if not board.is_empty(ep) or victim != Piece(side.opposite, PieceType.PAWN):
            raise ValueError(
                f"Invalid FEN en-passant square, no pawn to capture: {ep_part!r}"
            )

    # 5–6. Clocks (optional)
    halfmove = int(parts[4]) if len(parts) > 4 else 0
    if halfmove < 0:
        raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")

    fullmove = int(parts[5]) if len(parts) > 5 else 1
    if fullmove < 1:
        raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")

    return Position(board, side, ep, castling, halfmove, fullmove)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    castling_str = "".join(
        ch
        for ch, (color, castling_side) in _CASTLING_CHARS.items()
        if pos.castling.can_castle(color, castling_side)
    )
    if not castling_str:
        castling_str = "-"

    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return (
        f"{pos.board.fingerprint()} {side_str} {castling_str} {ep_str} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )
