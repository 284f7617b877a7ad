"""Ports for reading records out of the normalized client store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from graphpatch.domain.types import DataID, RecordData

    from .compiler import FragmentNode


@runtime_checkable
class RecordStore(Protocol):
    """Read-only view of records already present in the local graph.

    Implementations must never trigger a network fetch; a record that is not in
    the graph reads as whatever the store uses for "absent" (usually ``None``).
    """

    def read(self, fragment: FragmentNode, data_id: DataID) -> RecordData: ...

    def read_all(
        self,
        fragment: FragmentNode,
        data_ids: Sequence[DataID],
    ) -> Sequence[RecordData]: ...


__all__ = ["RecordStore"]
