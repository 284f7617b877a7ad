"""Declarative mutation descriptors.

A ``MutationDescriptor`` subclass describes one state-changing operation against
the client-held record graph: which server mutation to call, which fields may
change (the fat query), how to patch the cache with the response (configs), and
what input to send. Descriptors never send anything themselves; an external
coordinator reads them and drives the transport and the cache writer.

Construction resolves the caller's props: every prop bound to a declared
fragment is replaced by the record data the store holds for it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, ClassVar, Self, TypeGuard

from graphpatch.config import get_diagnostics_config

from .environment import get_compiler, get_store
from .errors import (
    AbstractMethodError,
    InvariantViolation,
    MissingFragmentPointerError,
    PropCardinalityError,
    UnknownFragmentError,
)
from .fragments import FragmentDeclaration, FragmentReference, build_mutation_fragment

if TYPE_CHECKING:
    from graphpatch.config import DiagnosticsConfig

    from .configs import MutationConfig
    from .ports import FragmentCompiler, FragmentNode, FragmentPointer, RecordStore
    from .types import DataID, FatQueryNode, FileMap, MutationNode, OptimisticResponse

log = logging.getLogger(__name__)


class MutationDescriptor(ABC):
    """Base class for modeling mutations of client-held data.

    Subclasses attach their fragments through the ``declaration`` class attribute::

        class LikeStoryMutation(MutationDescriptor):
            declaration = FragmentDeclaration(fragments={"story": story_fragment})

            def get_mutation(self): ...
            def get_fat_query(self): ...
            def get_configs(self): ...
            def get_variables(self): ...
    """

    declaration: ClassVar[FragmentDeclaration] = FragmentDeclaration()

    props: dict[str, object]

    def __new__(cls, *_args: object, **_kwargs: object) -> Self:
        missing = sorted(getattr(cls, "__abstractmethods__", ()))
        if missing:
            raise AbstractMethodError(cls.__name__, missing)
        return super().__new__(cls)

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if not isinstance(cls.declaration, FragmentDeclaration):
            raise InvariantViolation(
                f"{cls.__name__}.declaration must be a FragmentDeclaration, "
                f"got {type(cls.declaration).__name__}"
            )

    def __init__(
        self,
        props: Mapping[str, object],
        *,
        store: RecordStore | None = None,
        compiler: FragmentCompiler | None = None,
        diagnostics: DiagnosticsConfig | None = None,
    ) -> None:
        self._did_show_fake_data_warning = False
        self._diagnostics = diagnostics
        self.props = self._resolve_props(props, store=store, compiler=compiler)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(props={sorted(self.props)!r})"

    @abstractmethod
    def get_mutation(self) -> MutationNode:
        """Server-side mutation identity used to tell the server what to execute."""
        raise AbstractMethodError(type(self).__name__, ["get_mutation"])

    @abstractmethod
    def get_fat_query(self) -> FatQueryNode:
        """Every field that may change as a result of this mutation.

        The fat query is never executed on its own; it is intersected with the
        fields the client has actually fetched, so over-declaring is harmless
        while omissions lead to stale data later. Childless non-scalar fields
        mean "anything below this field may change".
        """
        raise AbstractMethodError(type(self).__name__, ["get_fat_query"])

    @abstractmethod
    def get_configs(self) -> Sequence[MutationConfig]:
        """Patch instructions used to build the query and write the response."""
        raise AbstractMethodError(type(self).__name__, ["get_configs"])

    @abstractmethod
    def get_variables(self) -> Mapping[str, object]:
        """Input sent along with the mutation query."""
        raise AbstractMethodError(type(self).__name__, ["get_variables"])

    def get_files(self) -> FileMap | None:
        """Files uploaded together with the mutation query."""
        return None

    def get_optimistic_response(self) -> OptimisticResponse | None:
        """Speculative payload written to the cache before the server answers.

        It mirrors the shape of the server payload but may be a subset (fields the
        client cannot compute) or a superset (fields not yet fetched) of it.
        """
        return None

    def get_optimistic_configs(self) -> Sequence[MutationConfig] | None:
        """Configs for the optimistic response; inferred elsewhere when ``None``."""
        return None

    def get_collision_key(self) -> str | None:
        """Mutations sharing a collision key are sent serially, in submission order.

        The descriptor only declares the key; the sending coordinator enforces it.
        """
        return None

    def _resolve_props(
        self,
        props: Mapping[str, object],
        *,
        store: RecordStore | None = None,
        compiler: FragmentCompiler | None = None,
    ) -> dict[str, object]:
        cls = type(self)
        mutation_name = cls.__name__
        declaration = cls.declaration
        resolved: dict[str, object] = dict(props)
        if not declaration.fragments:
            return resolved

        fragment_compiler = get_compiler() if compiler is None else compiler
        for fragment_name, builder in declaration.fragments.items():
            fragment = build_mutation_fragment(
                mutation_name,
                fragment_name,
                builder,
                declaration.initial_variables,
                compiler=fragment_compiler,
            )
            if fragment_name not in props:
                log.warning(
                    "Expected data for fragment `%s` to be supplied to `%s` as a prop. "
                    "Pass an explicit `None` if this is intentional.",
                    fragment_name,
                    mutation_name,
                )

            prop_value = props.get(fragment_name)
            if not prop_value:
                continue

            if fragment.is_plural():
                resolved[fragment_name] = self._resolve_plural(
                    fragment_name, prop_value, fragment, store=store
                )
            else:
                resolved[fragment_name] = self._resolve_singular(
                    fragment_name, prop_value, fragment, store=store
                )
        return resolved

    def _resolve_plural(
        self,
        fragment_name: str,
        prop_value: object,
        fragment: FragmentNode,
        *,
        store: RecordStore | None,
    ) -> list[object]:
        mutation_name = type(self).__name__
        if not _is_sequence(prop_value):
            raise PropCardinalityError(mutation_name, fragment_name, plural=True)

        data_ids: list[DataID] = []
        for index, item in enumerate(prop_value):
            pointer = _fragment_pointer(item, fragment.concrete_fragment_id)
            if not pointer:
                raise MissingFragmentPointerError(mutation_name, fragment_name, index)
            data_ids.extend(pointer.get_data_ids())

        records = (get_store() if store is None else store).read_all(fragment, data_ids)
        log.debug(
            "Resolved %d records for plural fragment `%s` on `%s`",
            len(data_ids),
            fragment_name,
            mutation_name,
        )
        return list(records)

    def _resolve_singular(
        self,
        fragment_name: str,
        prop_value: object,
        fragment: FragmentNode,
        *,
        store: RecordStore | None,
    ) -> object:
        mutation_name = type(self).__name__
        if _is_sequence(prop_value):
            raise PropCardinalityError(mutation_name, fragment_name, plural=False)

        pointer = _fragment_pointer(prop_value, fragment.concrete_fragment_id)
        if pointer:
            return (get_store() if store is None else store).read(fragment, pointer.get_data_id())

        if self._did_show_fake_data_warning:
            return prop_value
        diagnostics = get_diagnostics_config() if self._diagnostics is None else self._diagnostics
        if diagnostics.dev_warnings:
            self._did_show_fake_data_warning = True
            log.warning(
                "Expected prop `%s` supplied to `%s` to be data fetched from the store. "
                "This is likely an error unless you are purposely passing in mock data "
                "that conforms to the shape of this mutation's fragment.",
                fragment_name,
                mutation_name,
            )
        return prop_value

    @classmethod
    def get_fragment(
        cls,
        fragment_name: str,
        variable_mapping: Mapping[str, object] | None = None,
        *,
        compiler: FragmentCompiler | None = None,
    ) -> FragmentReference:
        """Return a lazily-built reference to one of this type's declared fragments."""

        declaration = cls.declaration
        builder = declaration.fragments.get(fragment_name)
        if builder is None:
            raise UnknownFragmentError(cls.__name__, fragment_name, declaration.fragment_names)

        initial_variables = declaration.initial_variables

        def build() -> FragmentNode:
            return build_mutation_fragment(
                cls.__name__,
                fragment_name,
                builder,
                initial_variables,
                compiler=get_compiler() if compiler is None else compiler,
            )

        return FragmentReference(
            build,
            initial_variables,
            variable_mapping,
            declaration.prepare_variables,
        )

    @classmethod
    def get_query(
        cls,
        fragment_name: str,
        variable_mapping: Mapping[str, object] | None = None,
        *,
        compiler: FragmentCompiler | None = None,
    ) -> FragmentReference:
        """Deprecated alias of ``get_fragment``."""

        log.warning(
            "%s.get_query is deprecated; use %s.get_fragment.",
            cls.__name__,
            cls.__name__,
        )
        return cls.get_fragment(fragment_name, variable_mapping, compiler=compiler)


def _is_sequence(value: object) -> TypeGuard[Sequence[object]]:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _fragment_pointer(value: object, fragment_id: str) -> FragmentPointer | None:
    if isinstance(value, Mapping):
        return value.get(fragment_id)  # pyright: ignore[reportUnknownMemberType, reportUnknownVariableType]
    return getattr(value, fragment_id, None)
