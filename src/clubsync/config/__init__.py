"""Application configuration helpers."""

from __future__ import annotations

from .directory import (
    DirectoryConfig,
    GoogleDirectoryConfig,
    get_directory_config,
    get_google_directory_config,
)
from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .reconcile import (
    ExpirationConfig,
    ReconcileConfig,
    get_expiration_config,
    get_reconcile_config,
)
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "DirectoryConfig",
    "ExpirationConfig",
    "GoogleDirectoryConfig",
    "MissingConfigurationError",
    "ReconcileConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_directory_config",
    "get_expiration_config",
    "get_google_directory_config",
    "get_reconcile_config",
    "get_storage_config",
    "require_env_var",
    "require_env_vars",
]
