"""Orchestration of communication from the request layer to the game logic and persistence layers (and the reverse direction)."""

import logging
from typing import Callable, Optional
from uuid import UUID

from src.api.models import (
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    ResetRequest,
    SquareRequest,
)
from src.chess.game import Game, MoveRecord
from src.chess.square import Square
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Color, Status
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)

GameAction = Callable[[Game], Optional[MoveRecord]]


class ChessService:
    """Orchestration of layers for a chess game session."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- Request handling logic ---
    def create_new_game(self) -> GameResponse:
        """Start a new session from the standard starting position."""

        # Create a new Game, and convert into GameModel
        created_game_data = Game.new_game().to_model()

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(created_game_data)
        logger.info("Created game %s", game_id)

        # Return a GameResponse
        return self._create_game_response(game_id, Game.from_model(stored_game))

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used by a frontend to (re)render the board after every action.
        """
        game = Game.from_model(self._fetch_game(request.game_id))
        return self._create_game_response(request.game_id, game)

    def select(self, request: SquareRequest) -> GameResponse:
        """Select (or deselect) a piece."""
        square = Square(request.row, request.col)
        return self._apply(request.game_id, lambda game: game.select(square))

    def move_to(self, request: SquareRequest) -> GameResponse:
        """Move the selected piece. An illegal target just drops the selection."""
        square = Square(request.row, request.col)
        return self._apply(request.game_id, lambda game: game.move_to(square))

    def tap(self, request: SquareRequest) -> GameResponse:
        """A tap on the board: select, deselect or move, depending on the current selection."""
        square = Square(request.row, request.col)
        return self._apply(request.game_id, lambda game: game.tap(square))

    def reset(self, request: ResetRequest) -> GameResponse:
        """Start over in the same session."""
        logger.info("Resetting game %s", request.game_id)
        return self._apply(request.game_id, lambda game: game.reset())

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")
        logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _apply(self, game_id: UUID, action: GameAction) -> GameResponse:
        """
        1. Retrieve persisted GameModel from repository
        2. Create a Game instance from it
        3. Perform the action
        4. Store the updated state (the session may have been deleted in the meantime)
        5. Return a GameResponse
        """
        game = Game.from_model(self._fetch_game(game_id))
        move_record = action(game)
        if self.repo.update_game(game_id, game.to_model()) is None:
            raise RepositoryError(f"Game with {game_id=} disappeared before it could be saved.")
        return self._create_game_response(game_id, game, move_record)

    def _create_game_response(
        self, game_id: UUID, game: Game, move_record: Optional[MoveRecord] = None
    ) -> GameResponse:
        """Convert the Game snapshot to a GameResponse (for game with given ID.)"""
        model = game.to_model()
        selected = game.selection.square if game.selection else None
        return GameResponse(
            game_id=game_id,
            board=game.current_board().to_layout(),
            active_color=Color(model.active_color),
            status=Status(model.status),
            winner=Color(model.winner) if model.winner else None,
            in_check=game.in_check,
            selected=(selected.row, selected.col) if selected else None,
            legal_destinations=sorted(
                (square.row, square.col) for square in game.legal_destinations()
            ),
            captured=model.captured,
            last_move_was_capture=move_record.is_capture if move_record else None,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
