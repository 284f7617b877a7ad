"""Post-mutation patch instructions.

A descriptor returns an ordered sequence of these configs. Each one tells the
cache writer how to fold the server's response back into the local graph:

- ``FieldsChangeConfig``: refetch fat-query fields on known records
- ``RangeAddConfig``: insert the new edge into a connection
- ``NodeDeleteConfig``: drop a node and its edge from a connection
- ``RangeDeleteConfig``: drop an edge from a connection, keeping the node
- ``RequiredChildrenConfig``: extra children appended to the mutation query;
  data fetched through them is never written to the store

Variants validate their required fields on construction so a malformed config
fails where it is built, not where the cache writer consumes it.
"""

# frozen dataclasses normalize their inputs through object.__setattr__
# pyright: reportUnknownVariableType=false

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Literal

from .errors import InvalidMutationConfigError

if TYPE_CHECKING:
    from .types import DataID


class MutationType(StrEnum):
    """Tag naming the config variant."""

    FIELDS_CHANGE = "FIELDS_CHANGE"
    RANGE_ADD = "RANGE_ADD"
    NODE_DELETE = "NODE_DELETE"
    RANGE_DELETE = "RANGE_DELETE"
    REQUIRED_CHILDREN = "REQUIRED_CHILDREN"


class RangeOperation(StrEnum):
    """What to do with a connection when a new edge arrives."""

    APPEND = "append"
    IGNORE = "ignore"
    PREPEND = "prepend"
    REFETCH = "refetch"
    REMOVE = "remove"


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldsChangeConfig:
    """Map fat-query field names to the record(s) they should refresh."""

    field_ids: Mapping[str, DataID | tuple[DataID, ...]]
    type: Literal[MutationType.FIELDS_CHANGE] = field(
        default=MutationType.FIELDS_CHANGE, init=False
    )

    def __post_init__(self) -> None:
        if not isinstance(self.field_ids, Mapping):
            raise InvalidMutationConfigError("FIELDS_CHANGE: `field_ids` must be a mapping")
        normalized: dict[str, DataID | tuple[DataID, ...]] = {}
        for field_name, ids in self.field_ids.items():
            _require_text(MutationType.FIELDS_CHANGE, "field_ids key", field_name)
            if isinstance(ids, str):
                _require_text(MutationType.FIELDS_CHANGE, f"field_ids[{field_name!r}]", ids)
                normalized[field_name] = ids
                continue
            if not isinstance(ids, Sequence):
                raise InvalidMutationConfigError(
                    f"FIELDS_CHANGE: `field_ids[{field_name!r}]` must be a data ID "
                    "or a sequence of data IDs"
                )
            for data_id in ids:
                _require_text(MutationType.FIELDS_CHANGE, f"field_ids[{field_name!r}]", data_id)
            normalized[field_name] = tuple(ids)
        object.__setattr__(self, "field_ids", MappingProxyType(normalized))


@dataclass(frozen=True, slots=True, kw_only=True)
class RangeAddConfig:
    """Add the edge found under ``edge_name`` to ``connection_name`` on the parent."""

    parent_name: str
    parent_id: DataID
    connection_name: str
    edge_name: str
    range_behaviors: Mapping[str, RangeOperation]
    type: Literal[MutationType.RANGE_ADD] = field(
        default=MutationType.RANGE_ADD, init=False
    )

    def __post_init__(self) -> None:
        _require_texts(self.type, parent_name=self.parent_name, parent_id=self.parent_id)
        _require_texts(self.type, connection_name=self.connection_name, edge_name=self.edge_name)
        if not isinstance(self.range_behaviors, Mapping) or not self.range_behaviors:
            raise InvalidMutationConfigError(
                "RANGE_ADD: `range_behaviors` must map at least one call to a range operation"
            )
        behaviors: dict[str, RangeOperation] = {}
        for call, operation in self.range_behaviors.items():
            if not isinstance(call, str):
                raise InvalidMutationConfigError(
                    f"RANGE_ADD: `range_behaviors` keys must be strings, got {call!r}"
                )
            try:
                behaviors[call] = RangeOperation(operation)
            except ValueError as exc:
                raise InvalidMutationConfigError(
                    f"RANGE_ADD: unknown range operation {operation!r} for call {call!r}"
                ) from exc
        object.__setattr__(self, "range_behaviors", MappingProxyType(behaviors))


@dataclass(frozen=True, slots=True, kw_only=True)
class NodeDeleteConfig:
    """Delete the node whose ID the response carries under ``deleted_id_field_name``."""

    parent_name: str
    parent_id: DataID
    connection_name: str
    deleted_id_field_name: str
    type: Literal[MutationType.NODE_DELETE] = field(
        default=MutationType.NODE_DELETE, init=False
    )

    def __post_init__(self) -> None:
        _require_texts(self.type, parent_name=self.parent_name, parent_id=self.parent_id)
        _require_texts(
            self.type,
            connection_name=self.connection_name,
            deleted_id_field_name=self.deleted_id_field_name,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class RangeDeleteConfig:
    """Remove an edge from a connection reached via ``path_to_connection``."""

    parent_name: str
    parent_id: DataID
    connection_name: str
    deleted_id_field_name: str
    path_to_connection: tuple[str, ...]
    type: Literal[MutationType.RANGE_DELETE] = field(
        default=MutationType.RANGE_DELETE, init=False
    )

    def __post_init__(self) -> None:
        _require_texts(self.type, parent_name=self.parent_name, parent_id=self.parent_id)
        _require_texts(
            self.type,
            connection_name=self.connection_name,
            deleted_id_field_name=self.deleted_id_field_name,
        )
        path = self.path_to_connection
        if isinstance(path, str) or not isinstance(path, Sequence) or not path:
            raise InvalidMutationConfigError(
                "RANGE_DELETE: `path_to_connection` must be a non-empty sequence of field names"
            )
        for segment in path:
            _require_text(self.type, "path_to_connection", segment)
        object.__setattr__(self, "path_to_connection", tuple(path))


@dataclass(frozen=True, slots=True, kw_only=True)
class RequiredChildrenConfig:
    """Extra query nodes appended to the mutation query."""

    children: tuple[object, ...]
    type: Literal[MutationType.REQUIRED_CHILDREN] = field(
        default=MutationType.REQUIRED_CHILDREN, init=False
    )

    def __post_init__(self) -> None:
        if isinstance(self.children, str) or not isinstance(self.children, Sequence):
            raise InvalidMutationConfigError(
                "REQUIRED_CHILDREN: `children` must be a sequence of query nodes"
            )
        object.__setattr__(self, "children", tuple(self.children))


type MutationConfig = (
    FieldsChangeConfig
    | RangeAddConfig
    | NodeDeleteConfig
    | RangeDeleteConfig
    | RequiredChildrenConfig
)


def _require_texts(config_type: MutationType, **values: object) -> None:
    for name, value in values.items():
        _require_text(config_type, name, value)


def _require_text(config_type: MutationType, name: str, value: object) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidMutationConfigError(
            f"{config_type}: `{name}` must be a non-empty string, got {value!r}"
        )


__all__ = [
    "FieldsChangeConfig",
    "MutationConfig",
    "MutationType",
    "NodeDeleteConfig",
    "RangeAddConfig",
    "RangeDeleteConfig",
    "RangeOperation",
    "RequiredChildrenConfig",
]
