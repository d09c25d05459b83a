"""
Movement rules: decide whether a single move is legal on a given board.

Key idea: Use strategy pattern to define a legality check for each piece type.

Every check is a pure function of the board and the two squares. Nothing gets mutated.
Out of scope (on purpose): check / checkmate, castling, en passant, promotion.
"""

from enum import Enum
from typing import Callable, Optional, Protocol

from chesscore.chess.pieces import PAWN_DIRECTION, PAWN_STARTING_ROW, Piece, PieceType
from chesscore.chess.square import Square

Vector = tuple[int, int]


class Board(Protocol):
    """Just the parts the movement rules need"""

    def piece(self, square: Square) -> Optional[Piece]: ...
    def is_empty(self, square: Square) -> bool: ...


class Verdict(Enum):
    """Outcome of a legality check. Anything other than LEGAL explains the rejection."""

    LEGAL = "legal"
    EMPTY_SOURCE = "no piece on the starting square"
    FRIENDLY_OCCUPANT = "target square is occupied by your own piece"
    SHAPE_INVALID = "piece cannot move like that"
    PATH_BLOCKED = "path is blocked"
    DESTINATION_INVALID = "target square occupancy does not allow this move"


def sign(n: int) -> int:
    return (n > 0) - (n < 0)


def deltas(from_square: Square, to_square: Square) -> Vector:
    return to_square.row - from_square.row, to_square.col - from_square.col


def squares_between(from_square: Square, to_square: Square) -> list[Square]:
    """
    Walk from one square to the other along the unit step (sign of each delta).
    Both endpoints are excluded.

    NOTE: only meaningful for straight or diagonal lines, the caller checks the shape first.
    """
    d_row, d_col = deltas(from_square, to_square)
    step_row, step_col = sign(d_row), sign(d_col)

    squares_found: list[Square] = []
    row, col = from_square.row + step_row, from_square.col + step_col
    while (row, col) != (to_square.row, to_square.col):
        squares_found.append(Square(row, col))
        row += step_row
        col += step_col
    return squares_found


def is_path_clear(from_square: Square, to_square: Square, board: Board) -> bool:
    return all(board.is_empty(sq) for sq in squares_between(from_square, to_square))


# --- PER PIECE RULES ---
def pawn_rule(from_square: Square, to_square: Square, board: Board) -> Verdict:
    """
    A pawn:
    - moves a single square forward onto an empty square.
    - can move by two when standing on its starting rank.
    - takes diagonally (one column sideways, one row forward) on an occupied square.

    NOTE: the square passed over by the double step is not inspected.
    """
    pawn = board.piece(from_square)
    assert pawn is not None
    direction = PAWN_DIRECTION[pawn.color]
    d_row, d_col = deltas(from_square, to_square)

    if d_col == 0:
        single_step = d_row == direction
        double_step = (
            from_square.row == PAWN_STARTING_ROW[pawn.color] and d_row == 2 * direction
        )
        if not (single_step or double_step):
            return Verdict.SHAPE_INVALID
        if not board.is_empty(to_square):
            return Verdict.DESTINATION_INVALID
        return Verdict.LEGAL

    if abs(d_col) == 1 and d_row == direction:
        # colour of the occupant was already checked: anything here is the opponent's
        if board.is_empty(to_square):
            return Verdict.DESTINATION_INVALID
        return Verdict.LEGAL

    return Verdict.SHAPE_INVALID


def knight_rule(from_square: Square, to_square: Square, board: Board) -> Verdict:
    """Knights jump: absolute deltas are 2 and 1 (in either order)"""
    d_row, d_col = deltas(from_square, to_square)
    if {abs(d_row), abs(d_col)} == {1, 2}:
        return Verdict.LEGAL
    return Verdict.SHAPE_INVALID


def bishop_rule(from_square: Square, to_square: Square, board: Board) -> Verdict:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    d_row, d_col = deltas(from_square, to_square)
    if d_row == 0 or abs(d_row) != abs(d_col):
        return Verdict.SHAPE_INVALID
    if not is_path_clear(from_square, to_square, board):
        return Verdict.PATH_BLOCKED
    return Verdict.LEGAL


def rook_rule(from_square: Square, to_square: Square, board: Board) -> Verdict:
    """Rooks move either horizontally or vertically"""
    d_row, d_col = deltas(from_square, to_square)
    if (d_row == 0) == (d_col == 0):
        return Verdict.SHAPE_INVALID
    if not is_path_clear(from_square, to_square, board):
        return Verdict.PATH_BLOCKED
    return Verdict.LEGAL


def queen_rule(from_square: Square, to_square: Square, board: Board) -> Verdict:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    as_rook = rook_rule(from_square, to_square, board)
    if as_rook != Verdict.SHAPE_INVALID:
        return as_rook
    return bishop_rule(from_square, to_square, board)


def king_rule(from_square: Square, to_square: Square, board: Board) -> Verdict:
    """
    The king moves by a single square to any of its neighbours.
    It is not checked whether the target square is attacked.
    """
    d_row, d_col = deltas(from_square, to_square)
    if abs(d_row) <= 1 and abs(d_col) <= 1:
        return Verdict.LEGAL
    return Verdict.SHAPE_INVALID


# -- STRATEGY PATTERN: MOVEMENT RULES ---
LegalityFn = Callable[[Square, Square, Board], Verdict]
MOVEMENT_RULES: dict[PieceType, LegalityFn] = {
    PieceType.PAWN: pawn_rule,
    PieceType.KNIGHT: knight_rule,
    PieceType.BISHOP: bishop_rule,
    PieceType.ROOK: rook_rule,
    PieceType.QUEEN: queen_rule,
    PieceType.KING: king_rule,
}


def check_move(board: Board, from_square: Square, to_square: Square) -> Verdict:
    """
    Decide on a move in three steps
    ----

    1. there has to be a piece on the starting square
    2. you cannot take your own piece
    3. the piece specific rule decides
    """
    mover = board.piece(from_square)
    if mover is None:
        return Verdict.EMPTY_SOURCE

    occupant = board.piece(to_square)
    if occupant is not None and occupant.is_same_color(mover):
        return Verdict.FRIENDLY_OCCUPANT

    movement_rule = MOVEMENT_RULES[mover.type]
    return movement_rule(from_square, to_square, board)


def is_legal(board: Board, from_square: Square, to_square: Square) -> bool:
    return check_move(board, from_square, to_square) == Verdict.LEGAL
