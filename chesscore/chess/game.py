"""
The GameSession is the entrypoint into the domain layer for the service layer (and the terminal shell).
It owns the Board and the MoveHistory:
validates a requested move, applies it, records it, and exposes undo/redo.

NOTE: whose turn it is, and whether the game has ended, are not tracked here.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from chesscore.chess.board import Board, Snapshot
from chesscore.chess.history import HistoryOutcome, MoveHistory
from chesscore.chess.moves import Move
from chesscore.chess.rules import Verdict, check_move
from chesscore.chess.square import Square
from chesscore.core.models import GameModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveResult:
    """Accepted (with the move that got recorded) or rejected (with the reason)"""

    reason: Verdict
    move: Optional[Move] = None

    @property
    def accepted(self) -> bool:
        return self.reason == Verdict.LEGAL


@dataclass
class GameSession:
    board: Board = field(default_factory=Board.starting_position)
    history: MoveHistory = field(default_factory=MoveHistory)

    @classmethod
    def new_game(cls) -> Self:
        return cls(Board.starting_position(), MoveHistory())

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a session from the information the Service layer actually has"""
        board = Board.from_fen(model.position)
        history = MoveHistory(
            undo_stack=[Move.from_uci(uci) for uci in model.undo_moves],
            redo_stack=[Move.from_uci(uci) for uci in model.redo_moves],
        )
        return cls(board, history)

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            position=self.board.to_fen(),
            undo_moves=[move.to_uci() for move in self.history.undo_stack],
            redo_moves=[move.to_uci() for move in self.history.redo_stack],
        )

    def try_move(self, from_square: Square, to_square: Square) -> MoveResult:
        """
        Attempt to make a move
        -----

        1. check legality (board stays untouched if rejected)
        2. remember what stands on the target square
        3. update the board
        4. record the move (this wipes the redo stack)
        """
        verdict = check_move(self.board, from_square, to_square)
        if verdict != Verdict.LEGAL:
            logger.debug(
                "Rejected %s%s: %s",
                from_square.to_algebraic(),
                to_square.to_algebraic(),
                verdict.value,
            )
            return MoveResult(verdict)

        move = Move(from_square, to_square, captured_piece=self.board.piece(to_square))
        self.board.move_piece(from_square, to_square)
        self.history.record_and_clear_redo(move)
        logger.debug("Accepted %s", move.to_uci())
        return MoveResult(verdict, move)

    def undo(self) -> HistoryOutcome:
        return self.history.undo(self.board)

    def redo(self) -> HistoryOutcome:
        return self.history.redo(self.board)

    def board_snapshot(self) -> Snapshot:
        return self.board.snapshot()
