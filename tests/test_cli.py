"""
Tests for the application factory and the init-db command.
"""

from __future__ import annotations

from unittest.mock import MagicMock

from passport_registry.factory import SCHEMA_PATH, create_app


def test_init_db_runs_schema(config) -> None:
    db = MagicMock()
    db.execute_sql_script.return_value = 1
    app = create_app(config, db_manager=db)

    result = app.test_cli_runner().invoke(args=["init-db"])

    assert result.exit_code == 0
    db.execute_sql_script.assert_called_once_with(SCHEMA_PATH)
    assert "Executed 1 SQL statements from schema.sql" in result.output


def test_factory_wires_service(config) -> None:
    app = create_app(config, db_manager=MagicMock())

    assert app.config["MAX_CONTENT_LENGTH"] == 1024 * 1024
    assert app.passport_service.photo_storage.bucket_path == config.upload_folder / "passport-photos"
    assert {"passports", "api"} <= set(app.blueprints)
