"""Tests for descriptor comparison."""

from __future__ import annotations

import itertools
from pathlib import Path

import pytest

from cachesync.descriptor import DiffResult, compare
from cachesync.descriptor.diff import PATH_STATUSES
from cachesync.paths import parse_ignore_list


def test_changed_added_and_matching_paths() -> None:
    result = compare({"a": "h1", "b": "h2"}, {"a": "h1", "b": "h3", "c": "h4"})

    assert result.changed == ("b",)
    assert result.added == ("c",)
    assert result.removed == ()
    assert result.matching == ("a",)
    assert result.has_changes()


def test_identical_descriptors_have_no_changes() -> None:
    descriptor = {"a": "h1", "b": "h2"}

    result = compare(descriptor, dict(descriptor))

    assert result == DiffResult(matching=("a", "b"))
    assert not result.has_changes()


def test_removed_paths_count_as_changes() -> None:
    result = compare({"a": "h1", "gone": "h2"}, {"a": "h1"})

    assert result.removed == ("gone",)
    assert result.has_changes()


@pytest.mark.parametrize("previous", [None, {}])
def test_no_previous_descriptor_marks_everything_added(previous: dict[str, str] | None) -> None:
    result = compare(previous, {"a": "h1", "b": "-"})

    assert result.added == ("a",)
    assert result.added_ignored == ("b",)
    assert result.changed == result.matching == result.removed == ()


def test_ignore_changes_marker_never_triggers_rebuild() -> None:
    result = compare({"kept": "-", "old": "-"}, {"kept": "-", "new": "-"})

    assert result.matching == ("kept",)
    assert result.added_ignored == ("new",)
    assert result.removed_ignored == ("old",)
    assert not result.has_changes()


def test_paths_excluded_since_last_run_are_removed_ignored() -> None:
    patterns = parse_ignore_list(["*.log"])

    result = compare({"a": "h1", "build.log": "h2"}, {"a": "h1"}, ignore_patterns=patterns, root=Path("/work"))

    assert result.removed_ignored == ("build.log",)
    assert not result.has_changes()


def test_paths_accessor_returns_status_bucket() -> None:
    result = compare({"a": "h1"}, {"a": "h2"})

    assert result.paths("changed") == ("a",)


_STATES = (None, "h1", "h2", "-")
_KEYS = ("k1", "k2", "k3")


def _descriptors() -> list[tuple[dict[str, str], dict[str, str]]]:
    pairs = []
    for previous_states in itertools.product(_STATES, repeat=len(_KEYS)):
        for current_states in itertools.product(_STATES, repeat=len(_KEYS)):
            previous = {key: state for key, state in zip(_KEYS, previous_states, strict=True) if state}
            current = {key: state for key, state in zip(_KEYS, current_states, strict=True) if state}
            pairs.append((previous, current))
    return pairs


def test_classification_is_complete_and_disjoint() -> None:
    for previous, current in _descriptors():
        result = compare(previous, current)
        buckets = [set(result.paths(status)) for status in PATH_STATUSES]

        assert sum(len(bucket) for bucket in buckets) == len(previous.keys() | current.keys())
        assert set().union(*buckets) == previous.keys() | current.keys()
        for left, right in itertools.combinations(buckets, 2):
            assert not left & right
