"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.chess.square import BOARD_SIZE
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, Status

PieceColor = str
PieceSymbols = str
Coordinates = tuple[int, int]


# --- REQUEST MODELS ---
class GetGameRequest(BaseModel):
    game_id: UUID


class ResetRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class SquareRequest(BaseModel):
    """A tap on the board, translated into (row, col). Row 0 is Black's back rank."""

    game_id: UUID
    row: int
    col: int

    @field_validator(*["row", "col"])
    @classmethod
    def validate_coordinate(cls, value: int) -> int:
        if not 0 <= value < BOARD_SIZE:
            raise InvalidRequestError(
                f"Coordinate {value!r} is off the board. Must lie in [0, {BOARD_SIZE - 1}]."
            )
        return value


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    board: list[str]
    active_color: Color
    status: Status
    winner: Optional[Color] = None
    in_check: bool
    selected: Optional[Coordinates] = None
    legal_destinations: list[Coordinates]
    captured: dict[PieceColor, PieceSymbols]
    last_move_was_capture: Optional[bool] = None
