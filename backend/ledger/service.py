"""Ledger service coordinating players, settings, games, sessions, and export."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from ledger.entry import parse_entries
from ledger.exceptions import InvalidPlayerNameError, UnknownGameError, UnknownPlayerError
from ledger.export import HistoryExport, LedgerExport
from ledger.scoring import DEFAULT_CONFIGURATION, ScoringPreset, apply_preset, custom_configuration
from ledger.session import aggregate
from ledger.settlement import settle, settle_game
from ledger.types import Player

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence
    from decimal import Decimal

    from ledger.entry import ScoreInput
    from ledger.scoring import ScoringConfiguration
    from ledger.types import Game, RawEntry, SessionTotal, SettledResult
    from shared.dal import GameRepository, PlayerRepository, SettingsRepository

logger = structlog.get_logger()


class LedgerService:
    """Coordinate the external store with settlement and session aggregation."""

    def __init__(
        self,
        player_repo: PlayerRepository,
        game_repo: GameRepository,
        settings_repo: SettingsRepository,
    ) -> None:
        self._player_repo = player_repo
        self._game_repo = game_repo
        self._settings_repo = settings_repo

    # -- players --

    async def register_player(self, name: str) -> Player:
        """Register a new player with a generated id."""
        player = Player(id=str(uuid4()), name=_validate_name(name))
        await self._player_repo.create_player(player)
        logger.info("registered player", player_id=player.id, name=player.name)
        return player

    async def rename_player(self, player_id: str, name: str) -> Player:
        """Rename a player. Settled games keep the name they were recorded with."""
        player = await self._player_repo.rename_player(player_id, _validate_name(name))
        if player is None:
            raise UnknownPlayerError(f"Unknown player: {player_id}")
        logger.info("renamed player", player_id=player_id, name=player.name)
        return player

    async def get_player(self, player_id: str) -> Player:
        player = await self._player_repo.get_player(player_id)
        if player is None:
            raise UnknownPlayerError(f"Unknown player: {player_id}")
        return player

    async def delete_player(self, player_id: str) -> None:
        if not await self._player_repo.delete_player(player_id):
            raise UnknownPlayerError(f"Unknown player: {player_id}")
        logger.info("deleted player", player_id=player_id)

    async def list_players(self) -> list[Player]:
        return await self._player_repo.list_players()

    # -- settings --

    async def get_settings(self) -> ScoringConfiguration:
        """Active configuration; the tenpin preset until something is saved."""
        return await self._settings_repo.get_settings() or DEFAULT_CONFIGURATION

    async def select_preset(self, preset: ScoringPreset) -> ScoringConfiguration:
        settings = apply_preset(await self.get_settings(), preset)
        await self._settings_repo.save_settings(settings)
        logger.info("selected scoring preset", preset=settings.preset)
        return settings

    async def update_custom_settings(
        self,
        uma: Sequence[Decimal | int | str],
        point_value: Decimal | int | str,
    ) -> ScoringConfiguration:
        settings = custom_configuration(tuple(uma), point_value)
        await self._settings_repo.save_settings(settings)
        logger.info("updated custom scoring", uma=settings.uma, point_value=settings.point_value)
        return settings

    async def update_settings(
        self,
        preset: ScoringPreset,
        uma: Sequence[Decimal | int | str] | None = None,
        point_value: Decimal | int | str | None = None,
    ) -> ScoringConfiguration:
        """Switch preset, or edit custom values; omitted custom values keep their current setting."""
        if preset != ScoringPreset.CUSTOM or (uma is None and point_value is None):
            return await self.select_preset(preset)
        current = await self.get_settings()
        return await self.update_custom_settings(
            current.uma if uma is None else uma,
            current.point_value if point_value is None else point_value,
        )

    # -- games --

    async def preview_game(
        self,
        player_ids: Sequence[str | None],
        scores: Sequence[ScoreInput],
    ) -> tuple[SettledResult, ...]:
        """Settle the current form input under the active settings without saving it."""
        entries = await self._parse(player_ids, scores)
        return settle(entries, await self.get_settings())

    async def record_game(
        self,
        player_ids: Sequence[str | None],
        scores: Sequence[ScoreInput],
    ) -> Game:
        """Validate, settle, and persist a game under the active settings."""
        entries = await self._parse(player_ids, scores)
        settings = await self.get_settings()
        game = settle_game(entries, settings)
        await self._game_repo.create_game(game)
        logger.info("recorded game", game_id=game.id, preset=settings.preset)
        return game

    async def get_game(self, game_id: str) -> Game:
        game = await self._game_repo.get_game(game_id)
        if game is None:
            raise UnknownGameError(f"Unknown game: {game_id}")
        return game

    async def delete_game(self, game_id: str) -> None:
        if not await self._game_repo.delete_game(game_id):
            raise UnknownGameError(f"Unknown game: {game_id}")
        logger.info("deleted game", game_id=game_id)

    async def list_games(self) -> list[Game]:
        """All games, most recent first."""
        return await self._game_repo.list_games()

    # -- session --

    async def session_totals(self, game_ids: Collection[str]) -> list[SessionTotal]:
        return aggregate(await self.list_games(), set(game_ids))

    # -- export --

    async def export_ledger(self, now: datetime | None = None) -> LedgerExport:
        return LedgerExport(
            players=await self.list_players(),
            games=await self.list_games(),
            settings=await self.get_settings(),
            export_date=now or datetime.now(tz=UTC),
        )

    async def export_history(self, now: datetime | None = None) -> HistoryExport:
        return HistoryExport(games=await self.list_games(), export_date=now or datetime.now(tz=UTC))

    # -- private helpers --

    async def _parse(
        self,
        player_ids: Sequence[str | None],
        scores: Sequence[ScoreInput],
    ) -> list[RawEntry]:
        players = {p.id: p for p in await self._player_repo.list_players()}
        return parse_entries(player_ids, scores, players)


def _validate_name(name: str) -> str:
    stripped = name.strip()
    if not stripped:
        raise InvalidPlayerNameError("Player name must not be empty")
    return stripped
