"""Application configuration helpers."""

from __future__ import annotations

from .env import float_env, optional_env
from .errors import ConfigurationError, MissingConfigurationError
from .feed import FeedConfig, get_feed_config
from .groups import DEFAULT_GROUP_CATALOG
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_GROUP_CATALOG",
    "ConfigurationError",
    "DatabaseConfig",
    "FeedConfig",
    "MissingConfigurationError",
    "StorageConfig",
    "configure_logging",
    "float_env",
    "get_database_config",
    "get_feed_config",
    "get_storage_config",
    "optional_env",
]
