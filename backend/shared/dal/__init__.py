"""Data access layer: repository interfaces for ledger persistence."""

from shared.dal.game_repository import GameRepository
from shared.dal.player_repository import PlayerRepository
from shared.dal.settings_repository import SettingsRepository

__all__ = [
    "GameRepository",
    "PlayerRepository",
    "SettingsRepository",
]
