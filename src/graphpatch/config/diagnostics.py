"""Diagnostic switches for mutation prop resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import read_env_flag

DEV_WARNINGS_ENV_VAR: Final[str] = "GRAPHPATCH_DEV_WARNINGS"


@dataclass(frozen=True, slots=True)
class DiagnosticsConfig:
    dev_warnings: bool = True


def get_diagnostics_config() -> DiagnosticsConfig:
    return DiagnosticsConfig(dev_warnings=read_env_flag(DEV_WARNINGS_ENV_VAR, default=True))
