"""Reusable fakes for fragment compilation, fragment pointers and the store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from graphpatch.domain.ports import FragmentBuilder, FragmentNode

STORY_FRAGMENT_ID = "__fragmentID123"
LIKERS_FRAGMENT_ID = "__fragmentID456"


@dataclass(frozen=True, slots=True)
class FakeFragment:
    """Compiled fragment stand-in; builders return it directly."""

    concrete_fragment_id: str
    plural: bool = False

    def is_plural(self) -> bool:
        return self.plural


def fragment_builder(fragment_id: str, *, plural: bool = False) -> Callable[[], FakeFragment]:
    def builder() -> FakeFragment:
        return FakeFragment(concrete_fragment_id=fragment_id, plural=plural)

    return builder


def invalid_builder() -> None:
    return None


class RecordingCompiler:
    """Compiler that calls the builder and records every compilation."""

    def __init__(self) -> None:
        self.calls: list[tuple[FragmentBuilder, frozenset[str]]] = []

    def compile(
        self,
        builder: FragmentBuilder,
        variable_names: frozenset[str],
    ) -> FragmentNode | None:
        self.calls.append((builder, variable_names))
        result = builder()
        return result if isinstance(result, FakeFragment) else None


@dataclass(frozen=True, slots=True)
class StubPointer:
    """Fragment pointer carrying one or more data IDs."""

    data_ids: tuple[str, ...]

    def get_data_id(self) -> str:
        return self.data_ids[0]

    def get_data_ids(self) -> Sequence[str]:
        return self.data_ids


def pointer_to(*data_ids: str, fragment_id: str = STORY_FRAGMENT_ID) -> dict[str, object]:
    """Fetched-data shape embedding a pointer for ``fragment_id``."""

    return {fragment_id: StubPointer(data_ids=data_ids)}


@dataclass(slots=True)
class RecordingStore:
    """Dictionary store that records every read."""

    records: Mapping[str, object] = field(default_factory=dict)
    reads: list[tuple[FragmentNode, str]] = field(default_factory=list)
    batch_reads: list[tuple[FragmentNode, list[str]]] = field(default_factory=list)

    @property
    def call_count(self) -> int:
        return len(self.reads) + len(self.batch_reads)

    def read(self, fragment: FragmentNode, data_id: str) -> object:
        self.reads.append((fragment, data_id))
        return self.records.get(data_id)

    def read_all(self, fragment: FragmentNode, data_ids: Sequence[str]) -> list[object]:
        self.batch_reads.append((fragment, list(data_ids)))
        return [self.records.get(data_id) for data_id in data_ids]


@dataclass(frozen=True, slots=True)
class StubRoute:
    name: str = "StoryRoute"
