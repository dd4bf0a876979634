"""Config loading and normalization for cache sync runs."""

from __future__ import annotations

import difflib
from pathlib import Path
from typing import Any

import yaml

from cachesync.config.model import CacheSyncConfig
from cachesync.constants.archive import DEFAULT_ARCHIVE_PATH, DEFAULT_CACHE_INFO_PATH
from cachesync.constants.config import ALLOWED_CONFIG_KEYS, CONFIG_FILENAME
from cachesync.constants.fingerprint import DEFAULT_FINGERPRINT_METHOD
from cachesync.descriptor.fingerprint import FingerprintMethod
from cachesync.exceptions import ConfigError


def load_config(root: Path, config_path: Path | None = None) -> CacheSyncConfig:
    """Load and validate config from ``cachesync.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return CacheSyncConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    unknown = sorted(str(key) for key in raw if key not in ALLOWED_CONFIG_KEYS)
    if unknown:
        hints = [_suggest_key(key) for key in unknown]
        rendered = ", ".join(f"{key} ({hint})" if hint else key for key, hint in zip(unknown, hints, strict=True))
        raise ConfigError(f"Unknown config key(s) in {path}: {rendered}")

    method_raw = raw.get("fingerprint_method", DEFAULT_FINGERPRINT_METHOD)
    if not isinstance(method_raw, str):
        raise ConfigError("fingerprint_method must be a string")

    cache_api_url = raw.get("cache_api_url")
    if cache_api_url is not None and not isinstance(cache_api_url, str):
        raise ConfigError("cache_api_url must be a string")

    stack_id = raw.get("stack_id", "")
    if not isinstance(stack_id, str):
        raise ConfigError("stack_id must be a string")

    return CacheSyncConfig(
        paths=tuple(_ensure_lines(raw.get("paths"), "paths")),
        ignore_paths=tuple(_ensure_lines(raw.get("ignore_paths"), "ignore_paths")),
        fingerprint_method=FingerprintMethod.parse(method_raw),
        compress_archive=_ensure_bool(raw.get("compress_archive", False), "compress_archive"),
        pipe=_ensure_bool(raw.get("pipe", False), "pipe"),
        cache_api_url=cache_api_url or None,
        stack_id=stack_id,
        cache_info_path=_ensure_path(raw.get("cache_info_path", DEFAULT_CACHE_INFO_PATH), "cache_info_path"),
        archive_path=_ensure_path(raw.get("archive_path", DEFAULT_ARCHIVE_PATH), "archive_path"),
        debug=_ensure_bool(raw.get("debug", False), "debug"),
    )


def _ensure_lines(value: Any, key_name: str) -> list[str]:
    """Accept a newline-separated string or a list of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return value.splitlines()
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a string or a list of strings")
    return list(value)


def _ensure_bool(value: Any, key_name: str) -> bool:
    # Environment-style "true"/"false" strings are accepted as well.
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
        return value.strip().lower() == "true"
    raise ConfigError(f"{key_name} must be a boolean")


def _ensure_path(value: Any, key_name: str) -> Path:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{key_name} must be a non-empty path string")
    return Path(value).expanduser()


def _suggest_key(key: str) -> str:
    matches = difflib.get_close_matches(key, sorted(ALLOWED_CONFIG_KEYS), n=1)
    return f"did you mean '{matches[0]}'?" if matches else ""
