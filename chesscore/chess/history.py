"""
Linear undo / redo history of applied moves.

Two stacks, most recent move on top:
* undo stack: moves that are currently applied on the board
* redo stack: moves that were undone and can be re-applied

Recording a new move wipes the redo stack (no branching history).
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto

from chesscore.chess.board import Board
from chesscore.chess.moves import Move

logger = logging.getLogger(__name__)


class HistoryOutcome(Enum):
    APPLIED = auto()
    NOTHING_TO_UNDO = auto()
    NOTHING_TO_REDO = auto()


@dataclass
class MoveHistory:
    undo_stack: list[Move] = field(default_factory=list)
    redo_stack: list[Move] = field(default_factory=list)

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    @property
    def undo_moves(self) -> tuple[Move, ...]:
        return tuple(self.undo_stack)

    @property
    def redo_moves(self) -> tuple[Move, ...]:
        return tuple(self.redo_stack)

    def record_and_clear_redo(self, move: Move) -> None:
        self.undo_stack.append(move)
        if self.redo_stack:
            logger.debug("Discarding %d redo move(s)", len(self.redo_stack))
        self.redo_stack.clear()

    def undo(self, board: Board) -> HistoryOutcome:
        """Take back the most recent move, putting back whatever it captured."""
        if not self.undo_stack:
            return HistoryOutcome.NOTHING_TO_UNDO

        move = self.undo_stack.pop()
        board.move_piece(move.to_square, move.from_square)
        board.place_piece(move.captured_piece, move.to_square)
        self.redo_stack.append(move)
        logger.debug("Undid %s", move.to_uci())
        return HistoryOutcome.APPLIED

    def redo(self, board: Board) -> HistoryOutcome:
        """Re-apply the most recently undone move (same semantics as making it the first time)."""
        if not self.redo_stack:
            return HistoryOutcome.NOTHING_TO_REDO

        move = self.redo_stack.pop()
        board.move_piece(move.from_square, move.to_square)
        self.undo_stack.append(move)
        logger.debug("Redid %s", move.to_uci())
        return HistoryOutcome.APPLIED
