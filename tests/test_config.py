"""
Unit tests for configuration loading.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from passport_registry.config import Config, load_config

ENV_KEYS = ["DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_NAME", "DB_POOL_SIZE",
            "SECRET_KEY", "UPLOAD_FOLDER", "PHOTO_BUCKET", "MAX_UPLOAD_MB", "LOG_LEVEL", "LOG_FILE"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # No stray .env from the working directory
    monkeypatch.chdir(tmp_path)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestLoadConfig:
    def test_defaults(self) -> None:
        config = load_config()

        assert config.db_host == "localhost"
        assert config.db_port == 3306
        assert config.photo_bucket == "passport-photos"
        assert config.max_content_length == 10 * 1024 * 1024
        assert config.log_file is None

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.internal")
        monkeypatch.setenv("DB_PORT", "3307")
        monkeypatch.setenv("DB_NAME", "registry")
        monkeypatch.setenv("UPLOAD_FOLDER", "/srv/uploads")
        monkeypatch.setenv("MAX_UPLOAD_MB", "5")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FILE", "logs/app.log")

        config = load_config()

        assert config.db_settings["host"] == "db.internal"
        assert config.db_settings["port"] == 3307
        assert config.db_settings["database"] == "registry"
        assert config.upload_folder == Path("/srv/uploads")
        assert config.max_upload_mb == 5
        assert config.log_level == "DEBUG"
        assert config.log_file == Path("logs/app.log")

    def test_reads_dotenv_file(self, tmp_path) -> None:
        (tmp_path / ".env").write_text("DB_USER=registry_app\nDB_POOL_SIZE=8\n")

        config = load_config()

        assert config.db_user == "registry_app"
        assert config.db_pool_size == 8

    def test_bad_integer(self, monkeypatch) -> None:
        monkeypatch.setenv("DB_POOL_SIZE", "many")
        with pytest.raises(ValueError, match="DB_POOL_SIZE"):
            load_config()

    def test_db_settings_charset(self) -> None:
        settings = Config().db_settings
        assert settings["charset"] == "utf8mb4"
