"""Protocol repository (implemented with SQLAlchemy in sql_repository.py, and with a dict in the tests)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """Storage of game sessions, one record per session id"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Stored session, or None for an unknown id."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a fresh session. The repository hands out the id."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the session after an action. None for an unknown id."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Drop the session and return what was stored. None for an unknown id."""
        ...
