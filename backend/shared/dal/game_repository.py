"""Abstract interface for settled game persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ledger.types import Game


class GameRepository(ABC):
    """Abstract interface for settled game persistence.

    Games are immutable once stored; the only mutation is deleting a game as a whole.
    """

    @abstractmethod
    async def create_game(self, game: Game) -> None: ...

    @abstractmethod
    async def get_game(self, game_id: str) -> Game | None: ...

    @abstractmethod
    async def list_games(self) -> list[Game]: ...

    @abstractmethod
    async def delete_game(self, game_id: str) -> bool: ...
