"""Square value type and coordinate helpers.

Board layout (row-major, Black's back rank first):
    a8=(0, 0), b8=(0, 1), ..., h8=(0, 7)
    a7=(1, 0), ...
    ...
    a1=(7, 0), b1=(7, 1), ..., h1=(7, 7)
"""

from __future__ import annotations

from typing import NamedTuple


class Square(NamedTuple):
    """Immutable (row, col) board coordinate, both in 0–7."""

    row: int
    col: int

    @property
    def index(self) -> int:
        """Flat index 0–63 into a row-major board."""
        return self.row * 8 + self.col

    @property
    def is_light(self) -> bool:
        """Whether this is a light square (a8 and h1 are light)."""
        return (self.row + self.col) % 2 == 0

    def __str__(self) -> str:
        return square_name(self)


def square_at(index: int) -> Square:
    """Square for a flat 0–63 index."""
    return Square(index // 8, index % 8)


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (7, 4) → 'e1', (0, 0) → 'a8'."""
    return chr(ord("a") + sq.col) + str(8 - sq.row)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → Square(row=4, col=4)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(8 - int(name[1]), ord(name[0]) - ord("a"))


ALL_SQUARES: tuple[Square, ...] = tuple(square_at(i) for i in range(64))

# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ALL_SQUARES[0:8]
A7, B7, C7, D7, E7, F7, G7, H7 = ALL_SQUARES[8:16]
A6, B6, C6, D6, E6, F6, G6, H6 = ALL_SQUARES[16:24]
A5, B5, C5, D5, E5, F5, G5, H5 = ALL_SQUARES[24:32]
A4, B4, C4, D4, E4, F4, G4, H4 = ALL_SQUARES[32:40]
A3, B3, C3, D3, E3, F3, G3, H3 = ALL_SQUARES[40:48]
A2, B2, C2, D2, E2, F2, G2, H2 = ALL_SQUARES[48:56]
A1, B1, C1, D1, E1, F1, G1, H1 = ALL_SQUARES[56:64]
