"""Fragment declarations and lazily-built fragment references."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from .errors import InvalidFragmentError

if TYPE_CHECKING:
    from .ports import FragmentBuilder, FragmentCompiler, FragmentNode, MetaRoute
    from .types import Variables

log = logging.getLogger(__name__)

type PrepareVariables = Callable[[Variables, MetaRoute], Variables]


@dataclass(frozen=True, slots=True)
class FragmentDeclaration:
    """Type-level fragment declarations shared by every instance of a descriptor.

    ``fragments`` maps prop names to builder functions, in declaration order.
    ``initial_variables`` seeds fragment construction; its key set is what the
    compiler sees as the declared variable names. ``prepare_variables`` derives
    route-specific variables right before a referenced fragment is used.
    """

    fragments: Mapping[str, FragmentBuilder] = field(default_factory=dict)
    initial_variables: Mapping[str, object] = field(default_factory=dict)
    prepare_variables: PrepareVariables | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fragments", MappingProxyType(dict(self.fragments)))
        object.__setattr__(
            self, "initial_variables", MappingProxyType(dict(self.initial_variables))
        )

    @property
    def fragment_names(self) -> tuple[str, ...]:
        return tuple(self.fragments)


@dataclass(frozen=True, slots=True)
class VariableReference:
    """Placeholder in a variable override that reads from the outer query's variables."""

    name: str


def build_mutation_fragment(
    mutation_name: str,
    fragment_name: str,
    builder: FragmentBuilder,
    variables: Mapping[str, object],
    *,
    compiler: FragmentCompiler,
) -> FragmentNode:
    """Compile ``builder`` with contextual errors naming the mutation and fragment."""

    fragment = compiler.compile(builder, frozenset(variables))
    if fragment is None:
        raise InvalidFragmentError(mutation_name, fragment_name)
    return fragment


class FragmentReference:
    """Reference to a fragment that is compiled on first use.

    Building is deferred so that descriptor types can be declared before the
    compiler (or route-specific variable preparation) is available.
    """

    __slots__ = (
        "_build",
        "_fragment",
        "_initial_variables",
        "_prepare_variables",
        "_variable_mapping",
    )

    def __init__(
        self,
        build: Callable[[], FragmentNode],
        initial_variables: Mapping[str, object],
        variable_mapping: Mapping[str, object] | None = None,
        prepare_variables: PrepareVariables | None = None,
    ) -> None:
        self._build = build
        self._fragment: FragmentNode | None = None
        self._initial_variables = dict(initial_variables)
        self._variable_mapping = dict(variable_mapping) if variable_mapping else {}
        self._prepare_variables = prepare_variables

    @property
    def is_built(self) -> bool:
        return self._fragment is not None

    def get_fragment(self) -> FragmentNode:
        if self._fragment is None:
            self._fragment = self._build()
        return self._fragment

    def get_variables(
        self,
        route: MetaRoute,
        outer_variables: Mapping[str, object] | None = None,
    ) -> Variables:
        """Return the variables this fragment should be built with for ``route``.

        Overrides are layered on top of the initial variables; overrides given as
        ``VariableReference`` are looked up in ``outer_variables`` and skipped with
        a warning when the outer query does not define them. The result is then
        passed through ``prepare_variables`` when the descriptor declares one.
        """

        variables: dict[str, object] = dict(self._initial_variables)
        outer = outer_variables or {}
        for name, value in self._variable_mapping.items():
            if isinstance(value, VariableReference):
                if value.name not in outer:
                    log.warning(
                        "Expected value for variable `%s` mapped to `%s` in fragment variables",
                        value.name,
                        name,
                    )
                    continue
                variables[name] = outer[value.name]
            else:
                variables[name] = value

        if self._prepare_variables is not None:
            return self._prepare_variables(variables, route)
        return variables
