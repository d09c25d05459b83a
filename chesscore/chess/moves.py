"""
Definition of a move, and its compact text encoding.

The encoding extends UCI notation with the captured piece, so an applied move can be stored and reversed later:
* "e2e4": the piece on e2 moved to e4, nothing was captured
* "e4d5p": the piece on e4 moved to d5 and took a black pawn standing there
"""

from dataclasses import dataclass
from typing import Optional, Self

from chesscore.chess.pieces import Piece
from chesscore.chess.square import Square, is_algebraic_square
from chesscore.core.exceptions import InvalidPositionError


@dataclass(frozen=True)
class Move:
    """An applied move. Keeps whatever stood on the target square, so it can be undone exactly."""

    from_square: Square
    to_square: Square
    captured_piece: Optional[Piece] = None

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """<from_square><to_square>[captured piece in FEN notation]"""
        if len(uci) not in (4, 5):
            raise InvalidPositionError(f"Cannot decode move: {uci!r}")
        from_alg, to_alg = uci[:2], uci[2:4]
        if not (is_algebraic_square(from_alg) and is_algebraic_square(to_alg)):
            raise InvalidPositionError(f"Cannot decode move: {uci!r}")

        captured = Piece.from_fen(uci[4]) if len(uci) == 5 else None
        return cls(Square.from_algebraic(from_alg), Square.from_algebraic(to_alg), captured)

    def to_uci(self) -> str:
        """Convert into (extended) UCI notation"""
        captured_char = self.captured_piece.to_fen() if self.captured_piece else ""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}{captured_char}"

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None
