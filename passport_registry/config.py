from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import dotenv_values, find_dotenv

BASE_PATH = Path(__file__).resolve().parent.parent


@dataclass
class Config:
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "root"
    db_password: str = "root"
    db_name: str = "passports"
    db_pool_size: int = 5
    secret_key: str = "dev-secret-key"
    upload_folder: Path = BASE_PATH / "uploads"
    photo_bucket: str = "passport-photos"
    max_upload_mb: int = 10
    allowed_photo_extensions: frozenset = field(
        default_factory=lambda: frozenset({"png", "jpg", "jpeg", "gif", "webp"})
    )
    log_level: str = "INFO"
    log_file: Path | None = None

    @property
    def db_settings(self) -> dict:
        """Keyword arguments for the mysql.connector pool."""
        return {
            "host": self.db_host,
            "port": self.db_port,
            "user": self.db_user,
            "password": self.db_password,
            "database": self.db_name,
            "charset": "utf8mb4",
            "collation": "utf8mb4_unicode_ci",
        }

    @property
    def max_content_length(self) -> int:
        return self.max_upload_mb * 1024 * 1024


def _int_env(env: dict, name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_config(env_file: str | None = None) -> Config:
    """
    Build the configuration from a .env file and the process environment.

    The .env file is looked up from the working directory unless env_file
    is given. Real environment variables win over the file.
    """
    path = env_file or find_dotenv(usecwd=True)
    env = {**(dotenv_values(path) if path else {}), **os.environ}

    log_file = env.get("LOG_FILE")
    return Config(
        db_host=env.get("DB_HOST", "localhost"),
        db_port=_int_env(env, "DB_PORT", 3306),
        db_user=env.get("DB_USER", "root"),
        db_password=env.get("DB_PASSWORD", "root"),
        db_name=env.get("DB_NAME", "passports"),
        db_pool_size=_int_env(env, "DB_POOL_SIZE", 5),
        secret_key=env.get("SECRET_KEY", "dev-secret-key"),
        upload_folder=Path(env.get("UPLOAD_FOLDER") or BASE_PATH / "uploads"),
        photo_bucket=env.get("PHOTO_BUCKET", "passport-photos"),
        max_upload_mb=_int_env(env, "MAX_UPLOAD_MB", 10),
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        log_file=Path(log_file) if log_file else None,
    )
