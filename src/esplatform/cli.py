"""CLI entry point for esplatform administration."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="esplatform",
        description="esplatform — Elasticsearch platform for full-text document indexing",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"esplatform {_get_version()}",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("config", help="Print the configuration with credentials masked")
    commands.add_parser("ping", help="Check that Elasticsearch answers")
    commands.add_parser("init", help="Create the index and the attachment pipeline")
    reset = commands.add_parser("reset", help="Remove indexed documents")
    reset.add_argument("provider", help="Provider id, or 'all' to drop the whole index")

    args = parser.parse_args(argv)

    from esplatform.config.settings import Settings
    from esplatform.observability.logging import setup_logging

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            return 1
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.log_level:
        settings.observability.log_level = args.log_level
    setup_logging(settings.observability)

    from esplatform.platform.base.exceptions import PlatformError
    from esplatform.platform.elasticsearch import ElasticSearchPlatform

    platform = ElasticSearchPlatform(settings.elastic)

    if args.command == "config":
        print(json.dumps(platform.get_configuration(), indent=2))
        return 0

    try:
        platform.load_platform()
        if args.command == "ping":
            ok = platform.test_platform()
            print("ok" if ok else "unreachable")
            return 0 if ok else 2
        if args.command == "init":
            platform.initialize_index()
        elif args.command == "reset":
            platform.reset_index(args.provider)
    except PlatformError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.getLogger(__name__).info("%s done", args.command)
    return 0


def _get_version() -> str:
    """Get the package version."""
    try:
        from esplatform import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    sys.exit(main())
