"""Ports for the external fragment compiler and the values it produces."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from graphpatch.domain.types import DataID


type FragmentBuilder = Callable[..., object]


@runtime_checkable
class FragmentNode(Protocol):
    """Compiled fragment as seen by prop resolution."""

    @property
    def concrete_fragment_id(self) -> str:
        """Key under which records embed their pointer for this fragment."""
        ...

    def is_plural(self) -> bool: ...


@runtime_checkable
class FragmentPointer(Protocol):
    """Reference embedded in fetched data that names the backing record(s)."""

    def get_data_id(self) -> DataID: ...

    def get_data_ids(self) -> Sequence[DataID]: ...


@runtime_checkable
class MetaRoute(Protocol):
    """Route identity handed to ``prepare_variables`` hooks."""

    @property
    def name(self) -> str: ...


@runtime_checkable
class FragmentCompiler(Protocol):
    """Turn a fragment builder plus declared variable names into a fragment."""

    def compile(
        self,
        builder: FragmentBuilder,
        variable_names: frozenset[str],
    ) -> FragmentNode | None: ...


__all__ = ["FragmentBuilder", "FragmentCompiler", "FragmentNode", "FragmentPointer", "MetaRoute"]
