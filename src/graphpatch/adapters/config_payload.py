"""Pydantic models for loosely-typed mutation config mappings.

Configs written as plain mappings tagged with ``type`` (``{"type": "RANGE_ADD",
"parentName": ..., "rangeBehaviors": {...}}``) are validated here and converted
into the canonical config dataclasses. Both camelCase keys and their snake_case
field names are accepted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from graphpatch.domain.configs import (
    FieldsChangeConfig,
    MutationConfig,
    NodeDeleteConfig,
    RangeAddConfig,
    RangeDeleteConfig,
    RangeOperation,
    RequiredChildrenConfig,
)
from graphpatch.domain.errors import InvalidMutationConfigError

log = logging.getLogger(__name__)


class ConfigPayloadModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)


class FieldsChangePayload(ConfigPayloadModel):
    type: Literal["FIELDS_CHANGE"]
    field_ids: dict[str, str | list[str]] = Field(alias="fieldIDs")

    def to_config(self) -> FieldsChangeConfig:
        return FieldsChangeConfig(
            field_ids={
                name: ids if isinstance(ids, str) else tuple(ids)
                for name, ids in self.field_ids.items()
            }
        )


class _ConnectionPayload(ConfigPayloadModel):
    parent_name: str = Field(alias="parentName")
    parent_id: str = Field(alias="parentID")
    connection_name: str = Field(alias="connectionName")


class RangeAddPayload(_ConnectionPayload):
    type: Literal["RANGE_ADD"]
    edge_name: str = Field(alias="edgeName")
    range_behaviors: dict[str, RangeOperation] = Field(alias="rangeBehaviors")

    def to_config(self) -> RangeAddConfig:
        return RangeAddConfig(
            parent_name=self.parent_name,
            parent_id=self.parent_id,
            connection_name=self.connection_name,
            edge_name=self.edge_name,
            range_behaviors=self.range_behaviors,
        )


class NodeDeletePayload(_ConnectionPayload):
    type: Literal["NODE_DELETE"]
    deleted_id_field_name: str = Field(alias="deletedIDFieldName")

    def to_config(self) -> NodeDeleteConfig:
        return NodeDeleteConfig(
            parent_name=self.parent_name,
            parent_id=self.parent_id,
            connection_name=self.connection_name,
            deleted_id_field_name=self.deleted_id_field_name,
        )


class RangeDeletePayload(_ConnectionPayload):
    type: Literal["RANGE_DELETE"]
    deleted_id_field_name: str = Field(alias="deletedIDFieldName")
    path_to_connection: list[str] = Field(alias="pathToConnection")

    def to_config(self) -> RangeDeleteConfig:
        return RangeDeleteConfig(
            parent_name=self.parent_name,
            parent_id=self.parent_id,
            connection_name=self.connection_name,
            deleted_id_field_name=self.deleted_id_field_name,
            path_to_connection=tuple(self.path_to_connection),
        )


class RequiredChildrenPayload(ConfigPayloadModel):
    type: Literal["REQUIRED_CHILDREN"]
    children: list[Any]

    def to_config(self) -> RequiredChildrenConfig:
        return RequiredChildrenConfig(children=tuple(self.children))


MutationConfigPayload = Annotated[
    FieldsChangePayload
    | RangeAddPayload
    | NodeDeletePayload
    | RangeDeletePayload
    | RequiredChildrenPayload,
    Field(discriminator="type"),
]

_PAYLOAD_ADAPTER: TypeAdapter[MutationConfigPayload] = TypeAdapter(MutationConfigPayload)


def parse_mutation_config(payload: Mapping[str, object]) -> MutationConfig:
    """Validate one tagged mapping and return the matching config dataclass."""

    try:
        model = _PAYLOAD_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        log.debug("Rejected mutation config payload: %s", exc)
        raise InvalidMutationConfigError(f"Malformed mutation config: {exc}") from exc
    return model.to_config()


def parse_mutation_configs(payloads: Iterable[Mapping[str, object]]) -> list[MutationConfig]:
    """Parse an ordered sequence of tagged mappings, preserving order."""

    return [parse_mutation_config(payload) for payload in payloads]


__all__ = [
    "FieldsChangePayload",
    "MutationConfigPayload",
    "NodeDeletePayload",
    "RangeAddPayload",
    "RangeDeletePayload",
    "RequiredChildrenPayload",
    "parse_mutation_config",
    "parse_mutation_configs",
]
