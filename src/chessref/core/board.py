"""Board - immutable piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from chessref.core.enums import Color, PieceType
from chessref.core.piece import Piece
from chessref.core.types import ALL_SQUARES, Square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Immutable 64-square board.

    Every edit goes through :meth:`replace`, which returns a new board, so a
    board handed to a simulation can never leak changes back into the game.
    """

    __slots__ = ("_squares",)

    def __init__(self, squares: tuple[Piece | None, ...] | None = None) -> None:
        if squares is None:
            squares = (None,) * 64
        elif len(squares) != 64:
            raise ValueError(f"Board needs 64 squares, got {len(squares)}")
        self._squares: tuple[Piece | None, ...] = squares

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq.row * 8 + sq.col]

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    def replace(self, changes: Mapping[Square, Piece | None]) -> Board:
        """Return a new board with *changes* applied."""
        squares = list(self._squares)
        for sq, piece in changes.items():
            squares[sq.row * 8 + sq.col] = piece
        return Board(tuple(squares))

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Yield every (square, piece) pair on the board."""
        for sq, piece in zip(ALL_SQUARES, self._squares):
            if piece is not None:
                yield sq, piece

    def pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [sq for sq, piece in self.occupied() if piece.color == color]

    def piece_count(self) -> int:
        return sum(1 for piece in self._squares if piece is not None)

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` if it is not on the board."""
        king = Piece(color, PieceType.KING)
        for sq, piece in zip(ALL_SQUARES, self._squares):
            if piece == king:
                return sq
        return None

    # -- Fingerprint --------------------------------------------------------

    def fingerprint(self) -> str:
        """FEN piece-placement text; identical occupancy gives identical text."""
        rows: list[str] = []
        for row in range(8):
            empty = 0
            text = ""
            for piece in self._squares[row * 8 : row * 8 + 8]:
                if piece is None:
                    empty += 1
                    continue
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
            if empty:
                text += str(empty)
            rows.append(text)
        return "/".join(rows)

    @classmethod
    def from_placement(cls, placement: str) -> Board:
        """Parse FEN piece-placement text (the inverse of :meth:`fingerprint`)."""
        ranks = placement.split("/")
        if len(ranks) != 8:
            raise ValueError(f"Invalid placement (must contain 8 ranks): {placement!r}")
        squares: list[Piece | None] = []
        for rank_text in ranks:
            width = 0
            for ch in rank_text:
                if ch.isdigit():
                    step = int(ch)
                    if not (1 <= step <= 8):
                        raise ValueError(f"Invalid placement digit {ch!r}: {placement!r}")
                    squares.extend([None] * step)
                    width += step
                else:
                    squares.append(Piece.from_char(ch))
                    width += 1
                if width > 8:
                    raise ValueError(f"Invalid placement rank width: {placement!r}")
            if width != 8:
                raise ValueError(f"Invalid placement rank width: {placement!r}")
        return cls(tuple(squares))

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        squares: list[Piece | None] = [None] * 64
        for col, pt in enumerate(_BACK_RANK):
            squares[col] = Piece(Color.BLACK, pt)
            squares[8 + col] = Piece(Color.BLACK, PieceType.PAWN)
            squares[48 + col] = Piece(Color.WHITE, PieceType.PAWN)
            squares[56 + col] = Piece(Color.WHITE, pt)
        return cls(tuple(squares))

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        return hash(self._squares)

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = [str(p) if p else "." for p in self._squares[row * 8 : row * 8 + 8]]
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
