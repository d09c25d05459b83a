"""Unit tests for chesscore/services/chess_service.py"""

from typing import Generator
from uuid import UUID, uuid4

import pytest

from chesscore.chess.board import STARTING_POSITION
from chesscore.core.exceptions import (
    IllegalMoveError,
    InvalidRequestError,
    RepositoryError,
)
from chesscore.core.models import GameModel
from chesscore.core.shared_types import Outcome
from chesscore.services.chess_service import (
    ChessService,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveRequest,
    RedoRequest,
    UndoRequest,
)

AFTER_E4 = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"


# --- MOCK DEPENDENCIES ----
class MockRepository:
    """Mock the GameRepository using a dictionary of game models."""

    def __init__(self) -> None:
        self._games: dict[UUID, GameModel] = {}

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        game_id = uuid4()
        self._games[game_id] = game
        return game, game_id

    def get_game(self, game_id: UUID) -> GameModel | None:
        return self._games.get(game_id)

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        if game_id not in self._games:
            return None
        self._games[game_id] = game
        return game

    def delete_game(self, game_id: UUID) -> GameModel | None:
        return self._games.pop(game_id, None)

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._games.clear()


@pytest.fixture
def mock_repository() -> Generator[MockRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def service(mock_repository: MockRepository) -> ChessService:
    return ChessService(mock_repository)


@pytest.fixture
def game_id(service: ChessService) -> UUID:
    return service.create_new_game(CreateGameRequest()).game_id


def move(game_id: UUID, frm: str, to: str) -> MoveRequest:
    return MoveRequest(game_id=game_id, from_square=frm, to_square=to)


# --- SERVICE - CREATE NEW GAME ----
def test_create_a_new_game(service: ChessService, mock_repository: MockRepository) -> None:
    response = service.create_new_game(CreateGameRequest())

    # Check response structure
    assert isinstance(response, GameResponse)
    assert isinstance(response.game_id, UUID)

    # Check response data
    assert response.position == STARTING_POSITION
    assert response.board[0] == ["r", "n", "b", "q", "k", "b", "n", "r"]
    assert response.board[4] == [None] * 8
    assert response.board[7] == ["R", "N", "B", "Q", "K", "B", "N", "R"]
    assert response.undo_moves == []
    assert response.redo_moves == []
    assert response.outcome == Outcome.CREATED

    # Check persisted data
    stored_game = mock_repository.get_game(response.game_id)
    assert stored_game == GameModel(position=STARTING_POSITION)


def test_create_from_custom_position(service: ChessService) -> None:
    response = service.create_new_game(CreateGameRequest(starting_position=AFTER_E4))
    assert response.position == AFTER_E4


def test_create_with_invalid_position(
    service: ChessService, mock_repository: MockRepository
) -> None:
    """A malformed placement is rejected as bad input before any game gets stored."""
    with pytest.raises(InvalidRequestError):
        request = CreateGameRequest(starting_position="/".join(["xx"] * 8))
        service.create_new_game(request)
    assert mock_repository._games == {}


# --- SERVICE - GET GAME ----
def test_get_existing_game_state(service: ChessService, game_id: UUID) -> None:
    response = service.get_game_state(GetGameRequest(game_id=game_id))
    assert response.game_id == game_id
    assert response.position == STARTING_POSITION
    assert response.outcome == Outcome.LOADED


def test_attempt_to_find_unknown_game(service: ChessService) -> None:
    with pytest.raises(RepositoryError):
        service.get_game_state(GetGameRequest(game_id=uuid4()))


# --- SERVICE - MAKE MOVE ----
def test_make_legal_move(
    service: ChessService, mock_repository: MockRepository, game_id: UUID
) -> None:
    response = service.make_move(move(game_id, "e2", "e4"))
    assert response.position == AFTER_E4
    assert response.undo_moves == ["e2e4"]
    assert response.outcome == Outcome.MOVE_ACCEPTED

    stored_game = mock_repository.get_game(game_id)
    assert stored_game == GameModel(position=AFTER_E4, undo_moves=["e2e4"], redo_moves=[])


def test_make_illegal_move(
    service: ChessService, mock_repository: MockRepository, game_id: UUID
) -> None:
    """Rejected moves raise, and nothing gets stored"""
    with pytest.raises(IllegalMoveError, match="e2e5"):
        service.make_move(move(game_id, "e2", "e5"))

    stored_game = mock_repository.get_game(game_id)
    assert stored_game == GameModel(position=STARTING_POSITION)


def test_move_in_unknown_game(service: ChessService) -> None:
    with pytest.raises(RepositoryError):
        service.make_move(move(uuid4(), "e2", "e4"))


def test_game_deleted_before_store(
    service: ChessService,
    mock_repository: MockRepository,
    game_id: UUID,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """The record disappears between loading and saving: report it rather than answering with unsaved state"""
    service.make_move(move(game_id, "e2", "e4"))

    def vanish(game_id: UUID, game: GameModel) -> None:
        mock_repository.delete_game(game_id)
        return None

    monkeypatch.setattr(mock_repository, "update_game", vanish)
    with pytest.raises(RepositoryError):
        service.make_move(move(game_id, "d2", "d4"))

def test_capture_is_persisted(service: ChessService, game_id: UUID) -> None:
    for frm, to in [("e2", "e4"), ("d7", "d5"), ("e4", "d5")]:
        response = service.make_move(move(game_id, frm, to))
    assert response.undo_moves == ["e2e4", "d7d5", "e4d5p"]


# --- SERVICE - UNDO / REDO ----
def test_undo_and_redo(service: ChessService, game_id: UUID) -> None:
    service.make_move(move(game_id, "e2", "e4"))

    undone = service.undo_move(UndoRequest(game_id=game_id))
    assert undone.outcome == Outcome.UNDONE
    assert undone.position == STARTING_POSITION
    assert undone.undo_moves == []
    assert undone.redo_moves == ["e2e4"]

    redone = service.redo_move(RedoRequest(game_id=game_id))
    assert redone.outcome == Outcome.REDONE
    assert redone.position == AFTER_E4
    assert redone.undo_moves == ["e2e4"]
    assert redone.redo_moves == []


def test_nothing_to_undo_or_redo(service: ChessService, game_id: UUID) -> None:
    """Reported in the response, not raised"""
    assert service.undo_move(UndoRequest(game_id=game_id)).outcome == Outcome.NOTHING_TO_UNDO
    assert service.redo_move(RedoRequest(game_id=game_id)).outcome == Outcome.NOTHING_TO_REDO


def test_new_move_discards_redo(service: ChessService, game_id: UUID) -> None:
    service.make_move(move(game_id, "e2", "e4"))
    service.undo_move(UndoRequest(game_id=game_id))
    response = service.make_move(move(game_id, "d2", "d4"))
    assert response.redo_moves == []
    assert service.redo_move(RedoRequest(game_id=game_id)).outcome == Outcome.NOTHING_TO_REDO


# --- SERVICE - DELETE GAME ----
def test_delete_game(service: ChessService, game_id: UUID) -> None:
    service.delete_game(DeleteGameRequest(game_id=game_id))
    with pytest.raises(RepositoryError):
        service.get_game_state(GetGameRequest(game_id=game_id))


def test_delete_unknown_game(service: ChessService) -> None:
    with pytest.raises(RepositoryError):
        service.delete_game(DeleteGameRequest(game_id=uuid4()))
