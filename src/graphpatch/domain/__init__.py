"""Mutation descriptors, their fragment declarations and patch configs."""

from __future__ import annotations

from .configs import (
    FieldsChangeConfig,
    MutationConfig,
    MutationType,
    NodeDeleteConfig,
    RangeAddConfig,
    RangeDeleteConfig,
    RangeOperation,
    RequiredChildrenConfig,
)
from .errors import (
    AbstractMethodError,
    EnvironmentAlreadyConfiguredError,
    EnvironmentNotConfiguredError,
    InvalidFragmentError,
    InvalidMutationConfigError,
    InvariantViolation,
    MissingFragmentPointerError,
    PropCardinalityError,
    UnknownFragmentError,
)
from .fragments import (
    FragmentDeclaration,
    FragmentReference,
    PrepareVariables,
    VariableReference,
    build_mutation_fragment,
)
from .mutation import MutationDescriptor

__all__ = [
    "AbstractMethodError",
    "EnvironmentAlreadyConfiguredError",
    "EnvironmentNotConfiguredError",
    "FieldsChangeConfig",
    "FragmentDeclaration",
    "FragmentReference",
    "InvalidFragmentError",
    "InvalidMutationConfigError",
    "InvariantViolation",
    "MissingFragmentPointerError",
    "MutationConfig",
    "MutationDescriptor",
    "MutationType",
    "NodeDeleteConfig",
    "PrepareVariables",
    "PropCardinalityError",
    "RangeAddConfig",
    "RangeDeleteConfig",
    "RangeOperation",
    "RequiredChildrenConfig",
    "UnknownFragmentError",
    "VariableReference",
    "build_mutation_fragment",
]
