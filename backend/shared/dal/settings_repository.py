"""Abstract interface for scoring settings persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ledger.scoring import ScoringConfiguration


class SettingsRepository(ABC):
    """Stores the single active scoring configuration."""

    @abstractmethod
    async def get_settings(self) -> ScoringConfiguration | None: ...

    @abstractmethod
    async def save_settings(self, settings: ScoringConfiguration) -> None: ...
