"""Adapters around the mutation descriptor core."""

from __future__ import annotations

from .config_payload import parse_mutation_config, parse_mutation_configs
from .legacy import declaration_from_legacy, legacy_declaration
from .memory_store import InMemoryRecordStore

__all__ = [
    "InMemoryRecordStore",
    "declaration_from_legacy",
    "legacy_declaration",
    "parse_mutation_config",
    "parse_mutation_configs",
]
