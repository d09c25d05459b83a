"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8 (rows, columns).
BOARD_DIMENSIONS = (8, 8)
FILES = "abcdefgh"


@dataclass(frozen=True)
class Square:
    """Grid coordinates: row 0 is the 8th rank, column 0 is the a-file."""

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' gets converted to (0, 0), 'h1' to (7, 7)"""
        col = ord(sq[0]) - ord("a")
        row = BOARD_DIMENSIONS[0] - int(sq[1])
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{FILES[self.col]}{BOARD_DIMENSIONS[0] - self.row}"


def is_algebraic_square(value: str) -> bool:
    """Two characters: a file letter 'a'-'h' followed by a rank digit '1'-'8'"""
    if len(value) != 2:
        return False
    file, rank = value[0], value[1]
    return file in FILES and rank in "12345678"
