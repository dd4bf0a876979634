"""Tests for include list parsing and normalization."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from cachesync.exceptions import PathNotFoundError, SpecParseError, UnresolvableLinkError
from cachesync.paths import normalize_indicator_by_path, parse_include_list


def test_parse_include_list_defaults_indicator_to_path() -> None:
    parsed = parse_include_list(["a/file.txt", "  node_modules -> package-lock.json  ", "", "   "])

    assert parsed == {
        "a/file.txt": "a/file.txt",
        "node_modules": "package-lock.json",
    }


def test_parse_include_list_skips_lines_without_path() -> None:
    assert parse_include_list([" -> indicator", "\t"]) == {}


def test_parse_include_list_keeps_ignore_changes_marker() -> None:
    assert parse_include_list(["build -> -"]) == {"build": "-"}


@pytest.mark.parametrize("line", ["a -> b -> c", "a ->", "a ->   "])
def test_parse_include_list_rejects_malformed_lines(line: str) -> None:
    with pytest.raises(SpecParseError):
        parse_include_list([line])


def test_normalize_expands_directory_into_self_indicated_files(make_tree) -> None:
    root = make_tree({"dir/one.txt": "1", "dir/nested/two.txt": "2"})

    normalized = normalize_indicator_by_path({"dir": "dir"}, root)

    one = str(root.resolve() / "dir" / "one.txt")
    two = str(root.resolve() / "dir" / "nested" / "two.txt")
    assert normalized == {two: two, one: one}


def test_normalize_files_inherit_directory_indicator(make_tree) -> None:
    root = make_tree({"dir/one.txt": "1", "dir/two.txt": "2", "lock.json": "{}"})

    normalized = normalize_indicator_by_path({"dir": "lock.json"}, root)

    indicator = str(root.resolve() / "lock.json")
    assert set(normalized.values()) == {indicator}
    assert len(normalized) == 2


def test_normalize_keeps_ignore_changes_marker(make_tree) -> None:
    root = make_tree({"build/out.bin": "x"})

    normalized = normalize_indicator_by_path({"build": "-"}, root)

    assert list(normalized.values()) == ["-"]


def test_normalize_accepts_absolute_paths(make_tree) -> None:
    root = make_tree({"file.txt": "x"})
    absolute = str(root.resolve() / "file.txt")

    assert normalize_indicator_by_path({absolute: absolute}, root) == {absolute: absolute}


def test_normalize_empty_directory_yields_no_entries(make_tree) -> None:
    root = make_tree({})
    (root / "empty").mkdir()

    assert normalize_indicator_by_path({"empty": "empty"}, root) == {}


def test_normalize_missing_path_fails(make_tree) -> None:
    root = make_tree({})

    with pytest.raises(PathNotFoundError, match="missing.txt"):
        normalize_indicator_by_path({"missing.txt": "missing.txt"}, root)


def test_normalize_missing_indicator_fails(make_tree) -> None:
    root = make_tree({"file.txt": "x"})

    with pytest.raises(PathNotFoundError, match="nope.lock"):
        normalize_indicator_by_path({"file.txt": "nope.lock"}, root)


def test_normalize_dangling_symlink_fails(make_tree) -> None:
    root = make_tree({})
    os.symlink(root / "gone", root / "link")

    with pytest.raises(UnresolvableLinkError, match="dangling"):
        normalize_indicator_by_path({"link": "link"}, root)


def test_normalize_symlink_loop_fails(make_tree) -> None:
    root = make_tree({"dir/file.txt": "x"})
    os.symlink(root / "dir", root / "dir" / "loop")

    with pytest.raises(UnresolvableLinkError, match="loop"):
        normalize_indicator_by_path({"dir": "dir"}, root)


def test_normalize_follows_directory_symlink_once(make_tree) -> None:
    root = make_tree({"real/file.txt": "x"})
    os.symlink(root / "real", root / "alias")

    normalized = normalize_indicator_by_path({"alias": "alias"}, root)

    assert list(normalized) == [str(Path(root.resolve(), "alias", "file.txt"))]
