"""Castling rights tracked as permanent "has moved" flags."""

from __future__ import annotations

from dataclasses import dataclass

from chessref.core.enums import CastlingSide, Color, PieceType
from chessref.core.piece import Piece
from chessref.core.types import Square

_HOME_ROW: tuple[int, int] = (7, 0)  # indexed by Color
_ROOK_COL: tuple[int, int] = (0, 7)  # indexed by CastlingSide
KING_COL = 4


def king_home(color: Color) -> Square:
    return Square(_HOME_ROW[int(color)], KING_COL)


def rook_home(color: Color, side: CastlingSide) -> Square:
    return Square(_HOME_ROW[int(color)], _ROOK_COL[int(side)])


_ROOK_CORNERS: dict[Square, tuple[Color, CastlingSide]] = {
    rook_home(color, side): (color, side)
    for color in Color
    for side in CastlingSide
}


@dataclass(frozen=True, slots=True)
class CastlingRights:
    """Which kings and rooks have moved.

    ``king_moved`` is indexed by :class:`Color`; ``rook_moved`` by
    ``[Color][CastlingSide]``. Flags only ever flip from False to True.
    """

    king_moved: tuple[bool, bool] = (False, False)
    rook_moved: tuple[tuple[bool, bool], tuple[bool, bool]] = (
        (False, False),
        (False, False),
    )

    @classmethod
    def none(cls) -> CastlingRights:
        """Rights with every king and rook marked as moved."""
        return cls((True, True), ((True, True), (True, True)))

    def has_king_moved(self, color: Color) -> bool:
        return self.king_moved[int(color)]

    def has_rook_moved(self, color: Color, side: CastlingSide) -> bool:
        return self.rook_moved[int(color)][int(side)]

    def can_castle(self, color: Color, side: CastlingSide) -> bool:
        """Whether neither the king nor the *side* rook of *color* has moved."""
        return not self.has_king_moved(color) and not self.has_rook_moved(color, side)

    def with_moved(
        self, color: Color, side: CastlingSide | None = None
    ) -> CastlingRights:
        """Mark *color*'s king (``side=None``) or one of its rooks as moved."""
        if side is None:
            king_moved = list(self.king_moved)
            king_moved[int(color)] = True
            return CastlingRights((king_moved[0], king_moved[1]), self.rook_moved)
        rows = [list(self.rook_moved[0]), list(self.rook_moved[1])]
        rows[int(color)][int(side)] = True
        return CastlingRights(
            self.king_moved,
            ((rows[0][0], rows[0][1]), (rows[1][0], rows[1][1])),
        )

    def after_move(self, piece: Piece, from_sq: Square, to_sq: Square) -> CastlingRights:
        """Rights after *piece* moved from *from_sq* to *to_sq*."""
        rights = self
        if piece.piece_type == PieceType.KING:
            rights = rights.with_moved(piece.color)

        # A rook leaving its corner, or anything landing on it, ends that right.
        for sq in (from_sq, to_sq):
            corner = _ROOK_CORNERS.get(sq)
            if corner is not None:
                rights = rights.with_moved(*corner)
        return rights
