"""Process-wide default collaborators for mutation descriptors.

Descriptors read records through a ``RecordStore`` and compile fragments through
a ``FragmentCompiler``. Callers can pass both explicitly; otherwise the ones
installed here via ``startup`` are used.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import EnvironmentAlreadyConfiguredError, EnvironmentNotConfiguredError

if TYPE_CHECKING:
    from .ports import FragmentCompiler, RecordStore

log = logging.getLogger(__name__)


@dataclass(slots=True)
class _EnvironmentState:
    store: RecordStore | None = None
    compiler: FragmentCompiler | None = None


_STATE = _EnvironmentState()


def startup(
    *,
    store: RecordStore,
    compiler: FragmentCompiler,
    force: bool = False,
) -> None:
    """Install the default store and compiler."""

    if is_started() and not force:
        raise EnvironmentAlreadyConfiguredError(
            "graphpatch environment already initialised. Pass force=True to reconfigure."
        )
    _STATE.store = store
    _STATE.compiler = compiler
    log.debug(
        "Environment started with store=%s compiler=%s",
        type(store).__name__,
        type(compiler).__name__,
    )


def is_started() -> bool:
    """Return whether default collaborators have been installed."""

    return _STATE.store is not None and _STATE.compiler is not None


def shutdown() -> None:
    """Forget the installed collaborators (primarily for tests)."""

    _STATE.store = None
    _STATE.compiler = None


def get_store() -> RecordStore:
    if _STATE.store is None:
        raise EnvironmentNotConfiguredError(
            "No record store configured. Call graphpatch.domain.environment.startup() "
            "or pass store= to the mutation."
        )
    return _STATE.store


def get_compiler() -> FragmentCompiler:
    if _STATE.compiler is None:
        raise EnvironmentNotConfiguredError(
            "No fragment compiler configured. Call graphpatch.domain.environment.startup() "
            "or pass compiler= to the mutation."
        )
    return _STATE.compiler
