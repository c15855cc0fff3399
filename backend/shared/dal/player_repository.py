"""Abstract interface for player persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ledger.types import Player


class PlayerRepository(ABC):
    """Abstract interface for player persistence.

    Implementations can use SQLite, PostgreSQL, etc.
    """

    @abstractmethod
    async def create_player(self, player: Player) -> None: ...

    @abstractmethod
    async def get_player(self, player_id: str) -> Player | None: ...

    @abstractmethod
    async def list_players(self) -> list[Player]: ...

    @abstractmethod
    async def rename_player(self, player_id: str, name: str) -> Player | None: ...

    @abstractmethod
    async def delete_player(self, player_id: str) -> bool: ...
