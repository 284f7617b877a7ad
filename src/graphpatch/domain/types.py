"""Shared value aliases for mutation descriptors."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

type DataID = str  # opaque record key in the normalized store
type Variables = Mapping[str, object]
type FileMap = Mapping[str, object]
type RecordData = object  # owned by the store; never built here

# Produced by the external query compiler; only transported by descriptors.
type MutationNode = object
type FatQueryNode = object
type OptimisticResponse = Mapping[str, object]
