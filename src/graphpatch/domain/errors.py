"""Fatal invariant violations raised by mutation descriptors.

Every error here signals a programmer mistake (a missing override, a malformed
fragment, a prop of the wrong shape). None of them are caught inside the
package; they surface to whoever constructed the descriptor.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class InvariantViolation(RuntimeError):
    """Base class for fatal programmer errors."""


class AbstractMethodError(InvariantViolation, TypeError):
    """Raised when a descriptor type does not implement a required method."""

    def __init__(self, type_name: str, methods: Sequence[str]) -> None:
        self.type_name = type_name
        self.methods = tuple(methods)
        noun = "method" if len(self.methods) == 1 else "methods"
        names = ", ".join(f"`{name}`" for name in self.methods)
        super().__init__(f"{type_name}: Expected abstract {noun} {names} to be implemented.")


class InvalidFragmentError(InvariantViolation):
    """Raised when a fragment builder does not compile into a fragment."""

    def __init__(self, mutation_name: str, fragment_name: str) -> None:
        self.mutation_name = mutation_name
        self.fragment_name = fragment_name
        super().__init__(
            f"Fragment builder defined on mutation `{mutation_name}` named `{fragment_name}` "
            "is not a valid fragment."
        )


class PropCardinalityError(InvariantViolation, TypeError):
    """Raised when a prop does not match the plurality of its fragment."""

    def __init__(self, mutation_name: str, fragment_name: str, *, plural: bool) -> None:
        self.mutation_name = mutation_name
        self.fragment_name = fragment_name
        self.plural = plural
        expected = (
            "a sequence of records because the corresponding fragment is plural"
            if plural
            else "a single record because the corresponding fragment is not plural"
        )
        super().__init__(
            f"Invalid prop `{fragment_name}` supplied to `{mutation_name}`, expected {expected}."
        )


class MissingFragmentPointerError(InvariantViolation):
    """Raised when an element of a plural prop carries no fragment pointer."""

    def __init__(self, mutation_name: str, fragment_name: str, index: int) -> None:
        self.mutation_name = mutation_name
        self.fragment_name = fragment_name
        self.index = index
        super().__init__(
            f"Invalid prop `{fragment_name}` supplied to `{mutation_name}`, "
            f"expected element at index {index} to have query data."
        )


class UnknownFragmentError(InvariantViolation, LookupError):
    """Raised when a fragment name was never declared on the descriptor type."""

    def __init__(self, mutation_name: str, fragment_name: str, available: Sequence[str]) -> None:
        self.mutation_name = mutation_name
        self.fragment_name = fragment_name
        self.available = tuple(available)
        names = ", ".join(f"`{name}`" for name in self.available) or "(none)"
        super().__init__(
            f"{mutation_name}.get_fragment(): `{fragment_name}` is not a valid fragment name. "
            f"Available fragment names: {names}"
        )


class InvalidMutationConfigError(InvariantViolation, ValueError):
    """Raised when a mutation config is missing or has malformed required fields."""


class EnvironmentNotConfiguredError(InvariantViolation):
    """Raised when a store or compiler is needed before ``startup`` was called."""


class EnvironmentAlreadyConfiguredError(InvariantViolation):
    """Raised when ``startup`` is called twice without ``force=True``."""
