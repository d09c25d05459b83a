"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from chesscore.chess.board import Board
from chesscore.chess.square import is_algebraic_square
from chesscore.core.exceptions import InvalidPositionError, InvalidRequestError
from chesscore.core.shared_types import Outcome

PieceChar = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    starting_position: Optional[str] = None

    @field_validator("starting_position")
    @classmethod
    def validate_starting_position(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        placement = value.strip()
        try:
            Board.from_fen(placement)
        except InvalidPositionError as exc:
            raise InvalidRequestError(f"Invalid piece placement: {exc}") from exc
        return placement


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        square = value.strip().lower()
        if not is_algebraic_square(square):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name (a1 - h8)."
            )
        return square


class UndoRequest(BaseModel):
    game_id: UUID


class RedoRequest(BaseModel):
    game_id: UUID


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    position: str
    board: list[list[Optional[PieceChar]]]
    undo_moves: list[str]
    redo_moves: list[str]
    outcome: Outcome
