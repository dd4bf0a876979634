"""CLI entrypoint for cachesync."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from cachesync import __version__
from cachesync.archive import read_archive_metadata, read_descriptor_from_archive
from cachesync.config import CacheSyncConfig, load_config
from cachesync.constants.archive import HEADER_ENTRY_NAME
from cachesync.constants.branding import CLI_DESCRIPTION
from cachesync.constants.fingerprint import (
    METHOD_FILE_CONTENT_HASH,
    METHOD_FILE_MTIME_ALIAS,
    METHOD_FILE_MTIME_AND_SIZE,
)
from cachesync.descriptor import FingerprintMethod
from cachesync.exceptions import CacheSyncError, ConfigError, InvalidPatternError, SpecParseError
from cachesync.pipeline import push_cache
from cachesync.upload import HttpUploader

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="cachesync",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    push = subparsers.add_parser("push", help="Archive and upload the cache if tracked paths changed")
    push.add_argument("-r", "--root", type=Path, default=Path("."), help="Working tree root (default: .)")
    push.add_argument("-c", "--config", type=Path, help="Explicit config file")
    push.add_argument(
        "-p",
        "--path",
        action="append",
        default=None,
        help="Include line: 'path' or 'path -> indicator' (repeat for multiple lines)",
    )
    push.add_argument(
        "-i",
        "--ignore",
        action="append",
        default=None,
        help="Ignore line: 'pattern' or '!pattern' (repeat for multiple lines, order matters)",
    )
    push.add_argument(
        "-m",
        "--fingerprint-method",
        choices=[METHOD_FILE_CONTENT_HASH, METHOD_FILE_MTIME_AND_SIZE, METHOD_FILE_MTIME_ALIAS],
        default=None,
        help="How changes are detected (default: file-content-hash)",
    )
    push.add_argument("-z", "--compress", action="store_true", default=None, help="Gzip the archive")
    push.add_argument("--pipe", action="store_true", default=None, help="Stream the archive instead of writing a file")
    push.add_argument("-u", "--url", default=None, help="Upload URL (archive is only written locally if omitted)")
    push.add_argument("--stack-id", default=None, help="Build stack identifier stored in the archive metadata")
    push.add_argument("--cache-info", type=Path, default=None, help="Previous cache info location")
    push.add_argument("--archive-path", type=Path, default=None, help="Local archive output path")
    push.add_argument("-d", "--debug", action="store_true", default=None, help="List individual paths in the diff")

    inspect = subparsers.add_parser("inspect", help="Print the metadata and cache info of an archive")
    inspect.add_argument("archive", type=Path, help="Archive written by 'cachesync push'")
    inspect.add_argument("--header-name", default=HEADER_ENTRY_NAME, help="Cache info entry name")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    debug = getattr(args, "debug", None) is True
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format="%(levelname)s %(message)s")

    if args.command == "inspect":
        return _handle_inspect(args)

    if args.command != "push":
        parser.error(f"Unsupported command: {args.command}")

    try:
        config = apply_cli_overrides(load_config(args.root, args.config), args)
        for line in config.summary_lines():
            logger.info("%s", line)
        uploader = HttpUploader(config.cache_api_url) if config.cache_api_url else None
        result = push_cache(config, root=args.root, uploader=uploader)
    except (ConfigError, SpecParseError, InvalidPatternError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except CacheSyncError as exc:
        print(f"Cache error: {exc}", file=sys.stderr)
        return 1

    logger.info("Result: %s", result.status)
    return 0


def apply_cli_overrides(config: CacheSyncConfig, args: argparse.Namespace) -> CacheSyncConfig:
    """Return *config* with every explicitly passed CLI flag applied on top."""
    overrides: dict[str, object] = {}
    if args.path is not None:
        overrides["paths"] = tuple(args.path)
    if args.ignore is not None:
        overrides["ignore_paths"] = tuple(args.ignore)
    if args.fingerprint_method is not None:
        overrides["fingerprint_method"] = FingerprintMethod.parse(args.fingerprint_method)
    if args.compress is not None:
        overrides["compress_archive"] = args.compress
    if args.pipe is not None:
        overrides["pipe"] = args.pipe
    if args.url is not None:
        overrides["cache_api_url"] = args.url or None
    if args.stack_id is not None:
        overrides["stack_id"] = args.stack_id
    if args.cache_info is not None:
        overrides["cache_info_path"] = args.cache_info
    if args.archive_path is not None:
        overrides["archive_path"] = args.archive_path
    if args.debug is not None:
        overrides["debug"] = args.debug
    return replace(config, **overrides)  # type: ignore[arg-type]


def _handle_inspect(args: argparse.Namespace) -> int:
    """Print archive metadata and cache info as JSON."""
    try:
        metadata = read_archive_metadata(args.archive)
        descriptor = read_descriptor_from_archive(args.archive, args.header_name)
    except CacheSyncError as exc:
        print(f"Cache error: {exc}", file=sys.stderr)
        return 1

    payload = {
        "metadata": metadata.decode("utf-8", errors="replace"),
        "paths": len(descriptor),
        "descriptor": descriptor,
    }
    print(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
