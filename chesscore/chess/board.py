"""The Game board: an 8x8 grid of squares, each holding at most one piece. No rules live here."""

from dataclasses import dataclass
from typing import Optional, Self

from chesscore.chess.pieces import Piece
from chesscore.chess.square import BOARD_DIMENSIONS, Square
from chesscore.core.exceptions import InvalidPositionError

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

Grid = list[list[Optional[Piece]]]
Snapshot = tuple[tuple[Optional[Piece], ...], ...]


def empty_grid() -> Grid:
    rows, cols = BOARD_DIMENSIONS
    return [[None for _ in range(cols)] for _ in range(rows)]


@dataclass
class Board:
    grid: Grid

    @classmethod
    def starting_position(cls) -> Self:
        """Standard opening arrangement: back ranks R N B Q K B N R behind a full rank of pawns."""
        return cls.from_fen(STARTING_POSITION)

    @classmethod
    def empty(cls) -> Self:
        return cls(empty_grid())

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0 of the grid), read from the a-file onwards
        * black pawns cover the 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.
        """
        fen_by_ranks = fen_str.split("/")
        if len(fen_by_ranks) != BOARD_DIMENSIONS[0]:
            raise InvalidPositionError(
                f"Placement must describe {BOARD_DIMENSIONS[0]} ranks: {fen_str!r}"
            )

        grid = empty_grid()
        # FEN string is read from top rank (8th), which is also the first row of the grid
        for row, fen_one_rank in enumerate(fen_by_ranks):
            col = 0
            for character in fen_one_rank:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
                    continue
                if col >= BOARD_DIMENSIONS[1]:
                    raise InvalidPositionError(
                        f"Rank {BOARD_DIMENSIONS[0] - row} holds too many squares: {fen_one_rank!r}"
                    )
                grid[row][col] = Piece.from_fen(character)
                col += 1
            if col != BOARD_DIMENSIONS[1]:
                raise InvalidPositionError(
                    f"Rank {BOARD_DIMENSIONS[0] - row} does not describe exactly {BOARD_DIMENSIONS[1]} squares: {fen_one_rank!r}"
                )
        return cls(grid)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(row) for row in self.grid)

    @staticmethod
    def _row_to_fen(row: list[Optional[Piece]]) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for piece in row:
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def piece(self, square: Square) -> Optional[Piece]:
        return self.grid[square.row][square.col]

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def place_piece(self, piece: Optional[Piece], square: Square) -> None:
        self.grid[square.row][square.col] = piece

    def remove_piece(self, square: Square) -> None:
        self.place_piece(None, square)

    def move_piece(self, from_square: Square, to_square: Square) -> None:
        """Relocate whatever stands on from_square. The destination's previous occupant is discarded."""
        piece_that_moved = self.piece(from_square)
        self.remove_piece(from_square)
        self.place_piece(piece_that_moved, to_square)

    def snapshot(self) -> Snapshot:
        """Read-only copy of the grid (for rendering)"""
        return tuple(tuple(row) for row in self.grid)
