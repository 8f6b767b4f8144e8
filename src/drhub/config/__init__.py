"""Application configuration helpers."""

from __future__ import annotations

from .backup import BackupConfig, get_backup_config
from .env import (
    ConfigurationError,
    MissingConfigurationError,
    env_flag,
    optional_env_var,
    require_env_var,
    require_env_vars,
)
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .hub import HubConfig, get_hub_config
from .logging import configure_logging

__all__ = [
    "BackupConfig",
    "ConfigurationError",
    "HubConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "env_flag",
    "get_backup_config",
    "get_hub_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
