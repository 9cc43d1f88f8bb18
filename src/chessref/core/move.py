"""Move record (one entry of the move log)."""

from __future__ import annotations

from dataclasses import dataclass

from chessref.core.enums import PieceType
from chessref.core.piece import Piece
from chessref.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of a completed move."""

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None
    is_castle: bool = False
    is_en_passant: bool = False
    is_promotion: bool = False
    promoted_to: PieceType | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promoted_to is not None:
            base += _PROMO_CHARS.get(self.promoted_to, "")
        return base

    @property
    def is_capture(self) -> bool:
        return self.captured is not None
