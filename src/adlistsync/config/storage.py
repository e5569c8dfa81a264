"""Gravity database location."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from .env import optional_env
from .errors import MissingConfigurationError

DEFAULT_DATABASE_PATH: Final[Path] = Path("/etc/pihole/gravity.db")


@dataclass(frozen=True, slots=True)
class StorageConfig:
    database_path: Path = field(default=DEFAULT_DATABASE_PATH)

    def resolve_database_path(self) -> Path:
        return self.database_path.expanduser().resolve()

    def database_uri(self, *, require_exists: bool = True) -> str:
        path = self.resolve_database_path()
        # the gravity database belongs to Pi-hole; never create one by accident
        if require_exists and not path.is_file():
            raise MissingConfigurationError(f"DB path '{path}' is invalid.")
        return f"sqlite+pysqlite:///{path}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def get_storage_config(*, database_path: Path | str | None = None) -> StorageConfig:
    if database_path is not None:
        return StorageConfig(database_path=Path(database_path))
    env_path = optional_env("ADLISTSYNC_DATABASE")
    return StorageConfig(database_path=Path(env_path)) if env_path else StorageConfig()


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """Resolve the database URI; an explicit ``storage`` beats ``DATABASE_URI``."""

    if storage is None:
        env_uri = os.getenv("DATABASE_URI")
        if env_uri:
            return DatabaseConfig(uri=env_uri)
    storage_config = storage or get_storage_config()
    return DatabaseConfig(uri=storage_config.database_uri())
