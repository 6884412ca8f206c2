"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "habit-cli"
    DB_FILENAME = "habit.db"
    SQLITE_PRAGMAS = {"foreign_keys": "on", "journal_mode": "wal"}

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HBT_DEV_MODE", default=False)
        self.LOG_LEVEL = os.getenv("HBT_LOG_LEVEL", "INFO").upper()
        self.DATABASE_URL = os.getenv("HBT_DATABASE_URL", self._build_sqlite_url())

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        explicit = os.getenv("HBT_DATA_DIR")
        if explicit:
            base_path = Path(explicit).expanduser()
        else:
            data_home = os.getenv("XDG_DATA_HOME")
            root = Path(data_home).expanduser() if data_home else Path.home() / ".local" / "share"
            base_path = root / self.APP_NAME
        path = base_path.resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {"check_same_thread": False}
        return {"connect_args": connect_args}
