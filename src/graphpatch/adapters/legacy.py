"""Translate legacy static-attribute declarations into ``FragmentDeclaration``.

Older descriptor types declared their fragments as loose class attributes
(``fragments``, ``initialVariables``, ``prepareVariables`` and the even older
``processQueryParams(route, prev_variables)`` hook). This adapter reads those
attributes once and produces the canonical declaration record, logging a
deprecation warning for every legacy spelling it had to honour.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, cast

from graphpatch.domain.errors import InvariantViolation
from graphpatch.domain.fragments import FragmentDeclaration

if TYPE_CHECKING:
    from graphpatch.domain.fragments import PrepareVariables
    from graphpatch.domain.mutation import MutationDescriptor
    from graphpatch.domain.ports import FragmentBuilder, MetaRoute
    from graphpatch.domain.types import Variables

log = logging.getLogger(__name__)

type ProcessQueryParams = Callable[[MetaRoute, Variables], Variables]


def declaration_from_legacy(cls: type) -> FragmentDeclaration:
    """Build a declaration from the legacy attributes found on ``cls``."""

    name = cls.__name__
    fragments = _legacy_attr(cls, "fragments", None)
    initial_variables = _legacy_attr(cls, "initial_variables", "initialVariables")
    prepare_variables = _legacy_attr(cls, "prepare_variables", "prepareVariables")
    process_query_params = _legacy_attr(cls, "process_query_params", "processQueryParams")

    if fragments is not None and not isinstance(fragments, Mapping):
        raise InvariantViolation(f"{name}.fragments must be a mapping of fragment builders")
    if initial_variables is not None and not isinstance(initial_variables, Mapping):
        raise InvariantViolation(f"{name}.initial_variables must be a mapping")

    prepare: PrepareVariables | None = cast("PrepareVariables | None", prepare_variables)
    if process_query_params is not None and prepare is None:
        _warn_deprecated(was=f"{name}.process_query_params", now=f"{name}.prepare_variables")
        prepare = _from_process_query_params(cast("ProcessQueryParams", process_query_params))

    return FragmentDeclaration(
        fragments=cast("Mapping[str, FragmentBuilder]", fragments or {}),
        initial_variables=cast("Mapping[str, object]", initial_variables or {}),
        prepare_variables=prepare,
    )


def legacy_declaration[T: MutationDescriptor](cls: type[T]) -> type[T]:
    """Class decorator installing ``declaration_from_legacy(cls)`` as ``cls.declaration``."""

    cls.declaration = declaration_from_legacy(cls)
    return cls


def _from_process_query_params(process_query_params: ProcessQueryParams) -> PrepareVariables:
    def prepare_variables(prev_variables: Variables, route: MetaRoute) -> Variables:
        return process_query_params(route, prev_variables)

    return prepare_variables


def _legacy_attr(cls: type, name: str, camel_name: str | None) -> object | None:
    value = getattr(cls, name, None)
    if value is not None:
        return value
    if camel_name is None:
        return None
    value = getattr(cls, camel_name, None)
    if value is not None:
        _warn_deprecated(was=f"{cls.__name__}.{camel_name}", now=f"{cls.__name__}.{name}")
    return value


def _warn_deprecated(*, was: str, now: str) -> None:
    log.warning("%s is deprecated; use %s.", was, now)


__all__ = ["declaration_from_legacy", "legacy_declaration"]
