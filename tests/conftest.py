"""Shared pytest fixtures for the test suite.

Fixture overview
----------------
config          - Config pointing the photo bucket at a temporary directory
passport_dao    - in-memory stand-in for PassportDAO (no MySQL needed)
photo_storage   - PhotoStorage over the temporary upload folder
service         - PassportService wired to the two above
app / client    - Flask application using that service, and its test client
"""

from __future__ import annotations

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

from passport_registry.config import Config
from passport_registry.factory import create_app
from passport_registry.models.entities.passport import Passport
from passport_registry.services.passport_service import PassportService
from passport_registry.storage.photo_storage import PhotoStorage


class InMemoryPassportDAO:
    """Same interface as PassportDAO, backed by a dict."""

    def __init__(self):
        self.rows: dict[str, dict] = {}
        self._clock = datetime(2024, 1, 1, 12, 0, 0)
        self._next_id = 1

    def _tick(self) -> datetime:
        self._clock += timedelta(minutes=1)
        return self._clock

    def get_all_passports(self):
        rows = sorted(self.rows.values(), key=lambda r: r["created_at"], reverse=True)
        return [Passport.from_row(row) for row in rows]

    def get_passport_by_id(self, passport_id):
        row = self.rows.get(passport_id)
        return Passport.from_row(row) if row else None

    def passport_number_exists(self, passport_number, exclude_id=None):
        return any(
            row["passport_number"] == passport_number and row_id != exclude_id
            for row_id, row in self.rows.items()
        )

    def insert_passport(self, values):
        passport_id = f"id-{self._next_id}"
        self._next_id += 1
        now = self._tick()
        row = {key: values.get(key) for key in Passport.FIELDS}
        row.update(id=passport_id, created_at=now, updated_at=now)
        self.rows[passport_id] = row
        return passport_id

    def update_passport(self, passport_id, patch):
        if passport_id not in self.rows:
            return 0
        self.rows[passport_id].update(
            {key: value for key, value in patch.items() if key in Passport.EDITABLE_FIELDS}
        )
        self.rows[passport_id]["updated_at"] = self._tick()
        return 1

    def delete_passport(self, passport_id):
        return 1 if self.rows.pop(passport_id, None) else 0


# ── Domain primitives ────────────────────────────────────────────────────────


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(
        secret_key="test-secret",
        upload_folder=tmp_path / "uploads",
        max_upload_mb=1,
    )


@pytest.fixture
def passport_dao() -> InMemoryPassportDAO:
    return InMemoryPassportDAO()


@pytest.fixture
def photo_storage(config) -> PhotoStorage:
    return PhotoStorage(config.upload_folder, config.photo_bucket, config.allowed_photo_extensions)


@pytest.fixture
def service(passport_dao, photo_storage) -> PassportService:
    return PassportService(passport_dao, photo_storage)


@pytest.fixture
def sample_form() -> dict:
    return {
        "first_name": "Amina",
        "last_name": "Diallo",
        "date_of_birth": "1990-04-12",
        "nationality": "Sénégalaise",
        "passport_number": "A1234567",
        "issue_date": "2020-01-15",
        "expiry_date": "2030-01-14",
        "photo": "",
    }


# ── Flask ────────────────────────────────────────────────────────────────────


@pytest.fixture
def app(config, service):
    application = create_app(config, db_manager=MagicMock())
    application.config["TESTING"] = True
    application.passport_service = service
    return application


@pytest.fixture
def client(app):
    return app.test_client()
