"""Unit tests for the release workflow stage list."""

from __future__ import annotations

import pytest

from mergegate.types import ConfigurationError
from mergegate.workflow import Workflow


@pytest.mark.parametrize(
    "stages",
    [
        ["testing", "production"],
        ["a", "b", "c"],
        ["dev", "qa", "staging", "uat", "prod"],
    ],
)
def test_index_of_round_trips_stage_at(stages: list[str]) -> None:
    workflow = Workflow.of(stages)
    for i in range(len(workflow)):
        assert workflow.index_of(workflow.stage_at(i)) == i


def test_index_of_unknown_is_minus_one() -> None:
    workflow = Workflow.of(["testing", "production"])
    assert workflow.index_of("feature/x") == -1
    assert "feature/x" not in workflow
    assert "testing" in workflow


def test_stage_at_out_of_range() -> None:
    workflow = Workflow.of(["testing", "production"])
    with pytest.raises(IndexError):
        workflow.stage_at(2)
    with pytest.raises(IndexError):
        workflow.stage_at(-1)


def test_is_last_stage_and_next_stage() -> None:
    workflow = Workflow.of(["a", "b", "c"])
    assert workflow.is_last_stage("c")
    assert not workflow.is_last_stage("b")
    assert not workflow.is_last_stage("unknown")
    assert workflow.next_stage("a") == "b"
    assert workflow.next_stage("b") == "c"
    assert workflow.next_stage("c") is None
    assert workflow.next_stage("unknown") is None


def test_parse_whitespace_separated() -> None:
    workflow = Workflow.parse("  testing   production\n")
    assert workflow.stages == ("testing", "production")
    assert list(workflow) == ["testing", "production"]


@pytest.mark.parametrize("stages", [[], ["main"]])
def test_rejects_fewer_than_two_stages(stages: list[str]) -> None:
    with pytest.raises(ConfigurationError, match="at least 2"):
        Workflow.of(stages)


def test_rejects_duplicate_stages() -> None:
    with pytest.raises(ConfigurationError, match="duplicate stages: testing"):
        Workflow.of(["testing", "production", "testing"])


def test_rejects_empty_stage_names() -> None:
    with pytest.raises(ConfigurationError, match="non-empty"):
        Workflow.of(["testing", ""])


def test_workflow_is_immutable() -> None:
    workflow = Workflow.of(["a", "b"])
    with pytest.raises(AttributeError):
        workflow.stages = ("c", "d")  # type: ignore[misc]
