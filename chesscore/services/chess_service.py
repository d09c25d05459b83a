"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from uuid import UUID

from chesscore.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveRequest,
    RedoRequest,
    UndoRequest,
)
from chesscore.chess.board import Board
from chesscore.chess.game import GameSession
from chesscore.chess.history import HistoryOutcome
from chesscore.chess.square import Square
from chesscore.core.exceptions import IllegalMoveError, RepositoryError
from chesscore.core.models import GameModel
from chesscore.core.shared_types import Outcome
from chesscore.db.repository import GameRepository

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for a chess game session."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a session, either in the standard position or in the requested one."""

        board = (
            Board.from_fen(request.starting_position)
            if request.starting_position
            else Board.starting_position()
        )
        session = GameSession(board=board)

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(session.to_model())
        logger.info("Created game %s", game_id)

        return self._create_game_response(game_id, stored_game, Outcome.CREATED)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """Retrieve current game state (used by a frontend to redraw the board)."""
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model, Outcome.LOADED)

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt."""

        # Retrieve persisted GameModel from repository
        session = GameSession.from_model(self._fetch_game(request.game_id))

        # Attempt the move
        result = session.try_move(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
        )
        if not result.accepted:
            raise IllegalMoveError(
                f"Move not allowed: {request.from_square}{request.to_square} ({result.reason.value})"
            )

        return self._store(request.game_id, session, Outcome.MOVE_ACCEPTED)

    def undo_move(self, request: UndoRequest) -> GameResponse:
        """Take back the last move. An empty history is reported, not raised."""
        session = GameSession.from_model(self._fetch_game(request.game_id))
        if session.undo() == HistoryOutcome.NOTHING_TO_UNDO:
            return self._store(request.game_id, session, Outcome.NOTHING_TO_UNDO)
        return self._store(request.game_id, session, Outcome.UNDONE)

    def redo_move(self, request: RedoRequest) -> GameResponse:
        """Re-apply the last undone move. Nothing to redo is reported, not raised."""
        session = GameSession.from_model(self._fetch_game(request.game_id))
        if session.redo() == HistoryOutcome.NOTHING_TO_REDO:
            return self._store(request.game_id, session, Outcome.NOTHING_TO_REDO)
        return self._store(request.game_id, session, Outcome.REDONE)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        deleted = self.repo.delete_game(request.game_id)
        if deleted is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")
        logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _store(self, game_id: UUID, session: GameSession, outcome: Outcome) -> GameResponse:
        """Capture updated state in GameModel, persist it and build the response."""
        model = session.to_model()
        if self.repo.update_game(game_id, model) is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return self._create_game_response(game_id, model, outcome)

    def _create_game_response(
        self, game_id: UUID, model: GameModel, outcome: Outcome
    ) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        board = Board.from_fen(model.position)
        return GameResponse(
            game_id=game_id,
            position=model.position,
            board=[
                [piece.to_fen() if piece else None for piece in row]
                for row in board.snapshot()
            ],
            undo_moves=model.undo_moves,
            redo_moves=model.redo_moves,
            outcome=outcome,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
