"""Application configuration helpers."""

from __future__ import annotations

from .diagnostics import DEV_WARNINGS_ENV_VAR, DiagnosticsConfig, get_diagnostics_config
from .env import read_env_flag
from .errors import ConfigurationError

__all__ = [
    "DEV_WARNINGS_ENV_VAR",
    "ConfigurationError",
    "DiagnosticsConfig",
    "get_diagnostics_config",
    "read_env_flag",
]
