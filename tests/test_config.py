"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from cachesync.config import CacheSyncConfig, load_config
from cachesync.constants.archive import DEFAULT_ARCHIVE_PATH, DEFAULT_CACHE_INFO_PATH
from cachesync.descriptor import FingerprintMethod
from cachesync.exceptions import ConfigError


def _write_config(root: Path, content: str) -> Path:
    config_path = root / "cachesync.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path


def test_load_config_defaults_when_missing(tmp_path: Path) -> None:
    loaded = load_config(tmp_path)

    assert loaded == CacheSyncConfig()
    assert loaded.fingerprint_method is FingerprintMethod.FILE_CONTENT_HASH
    assert loaded.cache_info_path == Path(DEFAULT_CACHE_INFO_PATH)
    assert loaded.archive_path == Path(DEFAULT_ARCHIVE_PATH)


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    assert load_config(tmp_path) == CacheSyncConfig()


def test_load_config_explicit_missing_file_fails(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Config file not found"):
        load_config(tmp_path, tmp_path / "other.yaml")


def test_load_config_reads_every_field(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path,
        "\n".join(
            [
                "paths:",
                "  - node_modules -> package-lock.json",
                "  - .gradle",
                "ignore_paths:",
                "  - '*.lock'",
                "  - '!keep.lock'",
                "fingerprint_method: file-mtime-and-size",
                "compress_archive: true",
                "pipe: true",
                "cache_api_url: https://cache.example.test/upload",
                "stack_id: linux-docker-22.04",
                f"cache_info_path: {tmp_path / 'info.json'}",
                f"archive_path: {tmp_path / 'cache.tar'}",
                "debug: true",
                "",
            ]
        ),
    )

    loaded = load_config(tmp_path, config_path)

    assert loaded.paths == ("node_modules -> package-lock.json", ".gradle")
    assert loaded.ignore_paths == ("*.lock", "!keep.lock")
    assert loaded.fingerprint_method is FingerprintMethod.FILE_MTIME_AND_SIZE
    assert loaded.compress_archive is True
    assert loaded.pipe is True
    assert loaded.cache_api_url == "https://cache.example.test/upload"
    assert loaded.stack_id == "linux-docker-22.04"
    assert loaded.cache_info_path == tmp_path / "info.json"
    assert loaded.archive_path == tmp_path / "cache.tar"
    assert loaded.debug is True


def test_load_config_accepts_newline_separated_paths(tmp_path: Path) -> None:
    _write_config(tmp_path, "paths: |\n  a/file.txt\n  b -> b/lock\n")

    assert load_config(tmp_path).paths == ("a/file.txt", "b -> b/lock")


def test_load_config_accepts_legacy_method_and_string_bools(tmp_path: Path) -> None:
    _write_config(tmp_path, "fingerprint_method: file-mtime\ncompress_archive: 'True'\npipe: 'false'\n")

    loaded = load_config(tmp_path)

    assert loaded.fingerprint_method is FingerprintMethod.FILE_MTIME_AND_SIZE
    assert loaded.compress_archive is True
    assert loaded.pipe is False


def test_load_config_unknown_key_suggests_closest(tmp_path: Path) -> None:
    _write_config(tmp_path, "ignore_path:\n  - '*.log'\n")

    with pytest.raises(ConfigError, match="did you mean 'ignore_paths'"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    ("yaml_content", "expected_match"),
    [
        ("- just\n- a list\n", "YAML mapping"),
        ("paths: [1, 2]\n", "paths"),
        ("compress_archive: maybe\n", "compress_archive"),
        ("fingerprint_method: md5\n", "fingerprint_method"),
        ("stack_id: 22\n", "stack_id"),
        ("cache_api_url: [x]\n", "cache_api_url"),
        ("archive_path: ''\n", "archive_path"),
        ("paths: [unclosed\n", "Invalid YAML"),
    ],
    ids=["not_mapping", "non_string_paths", "bad_bool", "bad_method", "bad_stack", "bad_url", "empty_path", "bad_yaml"],
)
def test_load_config_rejects_invalid_field_values(tmp_path: Path, yaml_content: str, expected_match: str) -> None:
    _write_config(tmp_path, yaml_content)

    with pytest.raises(ConfigError, match=expected_match):
        load_config(tmp_path)


def test_summary_lines_hide_the_upload_url() -> None:
    lines = CacheSyncConfig(cache_api_url="https://secret.example.test/?token=abc").summary_lines()

    assert "cache_api_url: <set>" in lines
    assert not any("token" in line for line in lines)
