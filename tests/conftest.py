from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from graphpatch.config import DEV_WARNINGS_ENV_VAR
from graphpatch.domain import environment
from tests.support.fragments import RecordingCompiler, RecordingStore

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv(DEV_WARNINGS_ENV_VAR, raising=False)
    environment.shutdown()
    try:
        yield
    finally:
        environment.shutdown()


@pytest.fixture
def compiler() -> RecordingCompiler:
    return RecordingCompiler()


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore(
        records={
            "id1": {"id": "id1", "text": "hi"},
            "id2": {"id": "id2", "text": "there"},
            "id3": {"id": "id3", "text": "again"},
        }
    )


@pytest.fixture
def started_environment(store: RecordingStore, compiler: RecordingCompiler) -> RecordingStore:
    environment.startup(store=store, compiler=compiler)
    return store
