import pytest
from pydantic import ValidationError

from server.settings import LedgerServerSettings


class TestLedgerServerSettings:
    def test_defaults(self, monkeypatch):
        for name in (
            "LEDGER_DATABASE_PATH",
            "LEDGER_LOG_DIR",
            "LEDGER_EXPORT_DIR",
            "LEDGER_LEGACY_EXPORT_FILE",
            "LEDGER_CORS_ORIGINS",
        ):
            monkeypatch.delenv(name, raising=False)
        settings = LedgerServerSettings()
        assert settings.database_path == "backend/storage.db"
        assert settings.log_dir == "backend/logs/ledger"
        assert settings.export_dir == "backend/data/exports"
        assert settings.legacy_export_file is None
        assert settings.cors_origins == []

    def test_legacy_export_file_override(self, monkeypatch):
        monkeypatch.setenv("LEDGER_LEGACY_EXPORT_FILE", "/srv/riichi-ledger-2025-01-15.json")
        settings = LedgerServerSettings()
        assert settings.legacy_export_file == "/srv/riichi-ledger-2025-01-15.json"

    def test_cors_origins_json_array(self, monkeypatch):
        monkeypatch.setenv("LEDGER_CORS_ORIGINS", '["http://x.com","http://y.com"]')
        settings = LedgerServerSettings()
        assert settings.cors_origins == ["http://x.com", "http://y.com"]

    def test_cors_origins_csv(self, monkeypatch):
        monkeypatch.setenv("LEDGER_CORS_ORIGINS", "http://x.com,http://y.com")
        settings = LedgerServerSettings()
        assert settings.cors_origins == ["http://x.com", "http://y.com"]

    def test_cors_origins_empty_array_allowed(self, monkeypatch):
        monkeypatch.setenv("LEDGER_CORS_ORIGINS", "[]")
        assert LedgerServerSettings().cors_origins == []

    def test_cors_origins_blank_raises(self, monkeypatch):
        monkeypatch.setenv("LEDGER_CORS_ORIGINS", "")
        with pytest.raises(ValidationError, match="cors_origins"):
            LedgerServerSettings()

    def test_database_path_must_not_be_empty(self):
        with pytest.raises(ValidationError, match="database_path"):
            LedgerServerSettings(database_path="")
