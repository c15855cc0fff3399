"""Tests for SqlitePlayerRepository."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from ledger.types import Player
from shared.db.connection import Database
from shared.db.player_repository import SqlitePlayerRepository

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def repo(tmp_path: Path):
    db = Database(tmp_path / "test.db")
    db.connect()
    yield SqlitePlayerRepository(db)
    db.close()


class TestCreateAndRead:
    async def test_create_and_get(self, repo: SqlitePlayerRepository) -> None:
        await repo.create_player(Player(id="p1", name="Alice"))

        assert await repo.get_player("p1") == Player(id="p1", name="Alice")

    async def test_get_unknown_returns_none(self, repo: SqlitePlayerRepository) -> None:
        assert await repo.get_player("missing") is None

    async def test_duplicate_id_raises(self, repo: SqlitePlayerRepository) -> None:
        await repo.create_player(Player(id="p1", name="Alice"))

        with pytest.raises(ValueError, match="already exists"):
            await repo.create_player(Player(id="p1", name="Bob"))

    async def test_duplicate_names_allowed(self, repo: SqlitePlayerRepository) -> None:
        await repo.create_player(Player(id="p1", name="Alice"))
        await repo.create_player(Player(id="p2", name="Alice"))

        assert len(await repo.list_players()) == 2

    async def test_list_orders_by_name_case_insensitive(self, repo: SqlitePlayerRepository) -> None:
        await repo.create_player(Player(id="p1", name="carol"))
        await repo.create_player(Player(id="p2", name="Alice"))
        await repo.create_player(Player(id="p3", name="bob"))

        assert [p.name for p in await repo.list_players()] == ["Alice", "bob", "carol"]

    async def test_concurrent_creates(self, repo: SqlitePlayerRepository) -> None:
        await asyncio.gather(*(repo.create_player(Player(id=f"p{i}", name=f"Player {i}")) for i in range(5)))

        assert len(await repo.list_players()) == 5


class TestRename:
    async def test_rename_updates_name(self, repo: SqlitePlayerRepository) -> None:
        await repo.create_player(Player(id="p1", name="Alice"))

        renamed = await repo.rename_player("p1", "Alicia")

        assert renamed == Player(id="p1", name="Alicia")
        assert await repo.get_player("p1") == renamed

    async def test_rename_unknown_returns_none(self, repo: SqlitePlayerRepository) -> None:
        assert await repo.rename_player("missing", "Nobody") is None
        assert await repo.list_players() == []


class TestDelete:
    async def test_delete_existing(self, repo: SqlitePlayerRepository) -> None:
        await repo.create_player(Player(id="p1", name="Alice"))

        assert await repo.delete_player("p1") is True
        assert await repo.get_player("p1") is None

    async def test_delete_unknown_returns_false(self, repo: SqlitePlayerRepository) -> None:
        assert await repo.delete_player("missing") is False
