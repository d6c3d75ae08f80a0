"""Command-line entry point for the DatoCMS to Hugo exporter."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Iterable, Sequence

from .client import DatoClient
from .config import (
    DEFAULT_API_URL,
    DEFAULT_COLLECTIONS,
    DEFAULT_HUGO_CONFIGS,
    DEFAULT_PAGE_SIZE,
    ENVIRONMENT_ENV_VAR,
    TOKEN_ENV_VAR,
    ExportConfig,
)
from .content import COLLECTIONS, fetch_snapshot
from .exporter import run_export

logger = logging.getLogger("dato_hugo.cli")


def _ensure_command_prefix(argv: Sequence[str], commands: Iterable[str]) -> Sequence[str]:
    if not argv:
        return ("export",)
    first = argv[0]
    if first in commands or first in ("-h", "--help"):
        return argv
    return ("export", *argv)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--token",
        default=os.getenv(TOKEN_ENV_VAR),
        help=f"DatoCMS read-only API token (default: ${TOKEN_ENV_VAR})",
    )
    parser.add_argument(
        "--api-url",
        default=DEFAULT_API_URL,
        help="Content Delivery API endpoint",
    )
    parser.add_argument(
        "--environment",
        default=os.getenv(ENVIRONMENT_ENV_VAR),
        help=f"DatoCMS environment to read from (default: ${ENVIRONMENT_ENV_VAR} or primary)",
    )
    parser.add_argument(
        "--include-drafts",
        action="store_true",
        help="Read draft versions of records instead of published ones",
    )
    parser.add_argument(
        "--locale",
        default=None,
        help="Locale to export (default: the first locale of the site)",
    )
    parser.add_argument(
        "--collection",
        dest="collections",
        action="append",
        choices=sorted(COLLECTIONS),
        help="Collection to export; repeat for several (default: services)",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=DEFAULT_PAGE_SIZE,
        help="Records requested per collection page",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="HTTP timeout in seconds",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate Hugo config, data and content files from a DatoCMS project.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser(
        "export", help="Write config patches, data files and Markdown content"
    )
    _add_common_arguments(export_parser)
    export_parser.add_argument(
        "--root",
        default=".",
        type=Path,
        help="Hugo project directory that receives the generated files",
    )
    export_parser.add_argument(
        "--hugo-config",
        dest="hugo_configs",
        action="append",
        help="Hugo TOML config to patch with title and languageCode; repeat for several "
        f"(default: {', '.join(DEFAULT_HUGO_CONFIGS)})",
    )

    snapshot_parser = subparsers.add_parser(
        "snapshot", help="Print the fetched content snapshot as JSON"
    )
    _add_common_arguments(snapshot_parser)

    argv = list(sys.argv[1:] if argv is None else argv)
    argv = list(_ensure_command_prefix(argv, subparsers.choices.keys()))
    args = parser.parse_args(argv)
    if not args.token:
        parser.error(f"an API token is required (--token or ${TOKEN_ENV_VAR})")
    if args.collections is None:
        args.collections = list(DEFAULT_COLLECTIONS)
    return args


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


def _run_export(args: argparse.Namespace) -> None:
    config = ExportConfig(
        root=Path(args.root).resolve(),
        api_token=args.token,
        api_url=args.api_url,
        environment=args.environment,
        include_drafts=args.include_drafts,
        locale=args.locale,
        collections=tuple(args.collections),
        hugo_configs=tuple(args.hugo_configs or DEFAULT_HUGO_CONFIGS),
        page_size=args.page_size,
        timeout=args.timeout,
    )
    report = run_export(config)
    logger.info(
        "Finished in %.2fs (%d file(s) written to %s)",
        report.total_seconds,
        len(report.written),
        config.root,
    )
    for name, count in report.collection_counts.items():
        logger.debug("Collection %s -> %d entries", name, count)


def _run_snapshot(args: argparse.Namespace) -> None:
    with DatoClient(
        args.token,
        api_url=args.api_url,
        environment=args.environment,
        include_drafts=args.include_drafts,
        timeout=args.timeout,
    ) as client:
        snapshot = fetch_snapshot(
            client,
            locale=args.locale,
            collections=args.collections,
            page_size=args.page_size,
        )
    json.dump(asdict(snapshot), sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    sys.stdout.flush()


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    _configure_logging(args.verbose)
    if args.command == "export":
        _run_export(args)
    else:
        _run_snapshot(args)


if __name__ == "__main__":
    main()
