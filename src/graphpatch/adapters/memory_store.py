"""Dictionary-backed record store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from graphpatch.domain.ports import FragmentNode
    from graphpatch.domain.types import DataID, RecordData

log = logging.getLogger(__name__)


class InMemoryRecordStore:
    """Hold records by data ID and serve them to mutation descriptors.

    Reads return the whole stored record regardless of the fragment; records
    missing from the store read as ``None`` and are never fetched.
    """

    def __init__(self, records: Mapping[DataID, RecordData] | None = None) -> None:
        self._records: dict[DataID, RecordData] = dict(records or {})

    def __contains__(self, data_id: object) -> bool:
        return data_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def put(self, data_id: DataID, record: RecordData) -> None:
        self._records[data_id] = record

    def read(self, fragment: FragmentNode, data_id: DataID) -> RecordData | None:
        record = self._records.get(data_id)
        if record is None:
            log.debug(
                "Record %s not in store (fragment %s)", data_id, fragment.concrete_fragment_id
            )
        return record

    def read_all(
        self,
        fragment: FragmentNode,
        data_ids: Sequence[DataID],
    ) -> list[RecordData | None]:
        return [self.read(fragment, data_id) for data_id in data_ids]


if TYPE_CHECKING:
    from graphpatch.domain.ports import RecordStore

    _store_check: RecordStore = InMemoryRecordStore()
