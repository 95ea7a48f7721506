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


def _env_number(name: str, default: float, *, cast=float, minimum: float = 0) -> Any:
    """Read a numeric environment variable, rejecting junk early."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return cast(default)
    try:
        value = cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be numeric, got {raw!r}") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "ListOnTheGo"
    DB_FILENAME = "listonthego.db"
    SQLITE_PRAGMAS = {"foreign_keys": "on"}

    def __init__(self, data_dir: Path | str | None = None) -> None:
        self.DATA_DIR = self._resolve_data_dir(data_dir)
        self.DEV_MODE = _env_bool("LISTONTHEGO_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("LISTONTHEGO_DATABASE_URL", self._build_sqlite_url())
        self.ANALYTICS_WINDOW_DAYS = _env_number(
            "LISTONTHEGO_ANALYTICS_WINDOW_DAYS", 30, cast=int, minimum=1
        )
        # Used by the Category Leader insight when sibling logs are not supplied.
        self.SIBLING_RATE_PLACEHOLDER = _env_number(
            "LISTONTHEGO_SIBLING_RATE_PLACEHOLDER", 70.0
        )

    def _resolve_data_dir(self, data_dir: Path | str | None = None) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = data_dir or os.getenv("LISTONTHEGO_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to a dot-directory in $HOME.
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        return {"connect_args": connect_args}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration for test runs: in-memory database, quiet console."""

    __test__ = False

    DEBUG = False
    TESTING = True

    def __init__(self, data_dir: Path | str | None = None) -> None:
        super().__init__(data_dir)
        self.DATABASE_URL = "sqlite://"
        self.DEV_MODE = False
