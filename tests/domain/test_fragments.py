from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from graphpatch.domain import (
    FragmentDeclaration,
    InvalidFragmentError,
    UnknownFragmentError,
    VariableReference,
    build_mutation_fragment,
)
from graphpatch.domain import environment
from tests.support.fragments import (
    STORY_FRAGMENT_ID,
    FakeFragment,
    RecordingCompiler,
    RecordingStore,
    StubRoute,
    fragment_builder,
    invalid_builder,
)
from tests.support.mutations import LikeStoryMutation, NotifyLikersMutation

if TYPE_CHECKING:
    from graphpatch.domain.ports import MetaRoute
    from graphpatch.domain.types import Variables


def test_get_fragment_rejects_unknown_name() -> None:
    with pytest.raises(UnknownFragmentError) as exc:
        LikeStoryMutation.get_fragment("nonexistent")

    assert isinstance(exc.value, LookupError)
    assert not isinstance(exc.value, KeyError)
    assert exc.value.available == ("story",)
    assert "Available fragment names: `story`" in str(exc.value)
    assert str(exc.value).startswith("LikeStoryMutation.get_fragment(): `nonexistent`")


def test_unknown_fragment_lists_every_declared_name() -> None:
    class TwoFragmentMutation(LikeStoryMutation):
        declaration = FragmentDeclaration(
            fragments={
                "story": fragment_builder(STORY_FRAGMENT_ID),
                "viewer": fragment_builder("__viewer"),
            }
        )

    with pytest.raises(UnknownFragmentError, match="`story`, `viewer`"):
        TwoFragmentMutation.get_fragment("comment")


def test_get_fragment_builds_lazily(compiler: RecordingCompiler) -> None:
    reference = LikeStoryMutation.get_fragment("story", compiler=compiler)

    assert not reference.is_built
    assert compiler.calls == []

    fragment = reference.get_fragment()

    assert reference.is_built
    assert fragment == FakeFragment(concrete_fragment_id=STORY_FRAGMENT_ID)
    assert [names for _builder, names in compiler.calls] == [frozenset({"is_viewer"})]


def test_get_fragment_builds_once(compiler: RecordingCompiler) -> None:
    reference = NotifyLikersMutation.get_fragment("likers", compiler=compiler)

    first = reference.get_fragment()
    second = reference.get_fragment()

    assert first is second
    assert len(compiler.calls) == 1
    assert first.is_plural()


def test_get_fragment_uses_environment_compiler_at_build_time(
    store: RecordingStore,
    compiler: RecordingCompiler,
) -> None:
    reference = LikeStoryMutation.get_fragment("story")
    environment.startup(store=store, compiler=compiler)

    reference.get_fragment()

    assert len(compiler.calls) == 1


def test_lazy_build_reports_invalid_fragment(compiler: RecordingCompiler) -> None:
    class BrokenMutation(LikeStoryMutation):
        declaration = FragmentDeclaration(fragments={"story": invalid_builder})

    reference = BrokenMutation.get_fragment("story", compiler=compiler)

    with pytest.raises(InvalidFragmentError, match="`BrokenMutation` named `story`"):
        reference.get_fragment()


def test_variables_default_to_initial_variables() -> None:
    reference = LikeStoryMutation.get_fragment("story")

    assert reference.get_variables(StubRoute()) == {"is_viewer": False}


def test_variable_override_is_merged_over_initial_variables() -> None:
    reference = LikeStoryMutation.get_fragment("story", {"is_viewer": True, "size": 32})

    assert reference.get_variables(StubRoute()) == {"is_viewer": True, "size": 32}


def test_get_query_is_deprecated_alias_of_get_fragment(
    compiler: RecordingCompiler,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING):
        reference = LikeStoryMutation.get_query("story", {"is_viewer": True}, compiler=compiler)

    expected = LikeStoryMutation.get_fragment("story", {"is_viewer": True}, compiler=compiler)
    assert not reference.is_built
    assert compiler.calls == []
    assert reference.get_variables(StubRoute()) == expected.get_variables(StubRoute())
    assert reference.get_fragment().concrete_fragment_id == STORY_FRAGMENT_ID
    assert (
        "LikeStoryMutation.get_query is deprecated; use LikeStoryMutation.get_fragment."
        in caplog.messages
    )


def test_variable_reference_reads_outer_variables() -> None:
    reference = LikeStoryMutation.get_fragment(
        "story", {"is_viewer": VariableReference("viewer_flag")}
    )

    variables = reference.get_variables(StubRoute(), {"viewer_flag": True})

    assert variables == {"is_viewer": True}


def test_missing_outer_variable_is_skipped_with_warning(
    caplog: pytest.LogCaptureFixture,
) -> None:
    reference = LikeStoryMutation.get_fragment(
        "story", {"is_viewer": VariableReference("viewer_flag")}
    )

    with caplog.at_level(logging.WARNING):
        variables = reference.get_variables(StubRoute(), {})

    assert variables == {"is_viewer": False}
    assert "viewer_flag" in caplog.text


def test_prepare_variables_receives_merged_variables_and_route() -> None:
    seen: list[tuple[dict[str, object], str]] = []

    def prepare_variables(prev_variables: Variables, route: MetaRoute) -> Variables:
        seen.append((dict(prev_variables), route.name))
        return {**prev_variables, "route": route.name}

    class RoutedMutation(LikeStoryMutation):
        declaration = FragmentDeclaration(
            fragments={"story": fragment_builder(STORY_FRAGMENT_ID)},
            initial_variables={"is_viewer": False},
            prepare_variables=prepare_variables,
        )

    reference = RoutedMutation.get_fragment("story")

    assert reference.get_variables(StubRoute(name="FeedRoute")) == {
        "is_viewer": False,
        "route": "FeedRoute",
    }
    assert seen == [({"is_viewer": False}, "FeedRoute")]


def test_declaration_is_read_only() -> None:
    declaration = FragmentDeclaration(
        fragments={"story": fragment_builder(STORY_FRAGMENT_ID)},
        initial_variables={"count": 10},
    )

    with pytest.raises(TypeError):
        declaration.initial_variables["count"] = 20  # type: ignore[index]
    assert declaration.fragment_names == ("story",)


def test_declaration_copies_caller_mappings() -> None:
    fragments = {"story": fragment_builder(STORY_FRAGMENT_ID)}
    declaration = FragmentDeclaration(fragments=fragments)

    fragments["viewer"] = fragment_builder("__viewer")

    assert declaration.fragment_names == ("story",)


def test_build_mutation_fragment_passes_variable_names(compiler: RecordingCompiler) -> None:
    builder = fragment_builder(STORY_FRAGMENT_ID)

    fragment = build_mutation_fragment(
        "LikeStoryMutation", "story", builder, {"a": 1, "b": 2}, compiler=compiler
    )

    assert fragment.concrete_fragment_id == STORY_FRAGMENT_ID
    assert compiler.calls == [(builder, frozenset({"a", "b"}))]
