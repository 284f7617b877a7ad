"""Domain port definitions for adapters."""

from __future__ import annotations

from .compiler import FragmentBuilder, FragmentCompiler, FragmentNode, FragmentPointer, MetaRoute
from .store import RecordStore

__all__ = [
    "FragmentBuilder",
    "FragmentCompiler",
    "FragmentNode",
    "FragmentPointer",
    "MetaRoute",
    "RecordStore",
]
