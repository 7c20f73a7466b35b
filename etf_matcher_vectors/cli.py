#!/usr/bin/env python3
# etf_matcher_vectors/cli.py

"""
Command-line access to the ETF Matcher vector catalog.

Examples:
  List every configuration in the published catalog:
    %(prog)s list

  Show one configuration:
    %(prog)s show v5-sma-lstm-stacks

  Download a vector collection:
    %(prog)s fetch v5-sma-lstm-stacks -o vectors.bin

  Use a local manifest instead of the remote one:
    %(prog)s --catalog-file ticker_vector_configs.toml list
"""

import argparse
import json
import sys

from etf_matcher_vectors.config.config_loader import ConfigLoader
from etf_matcher_vectors.constants import __version__
from etf_matcher_vectors.helpers.atomic_write import AtomicWriteError, atomic_write_bytes
from etf_matcher_vectors.helpers.urls import resolve_resource_url
from etf_matcher_vectors.services.catalog_service import (
    FileCatalogSource,
    get_all_configs,
    get_config_by_key,
    set_catalog_source,
)
from etf_matcher_vectors.services.resource_service import (
    fetch_config_resource,
    fetch_symbol_map,
)
from etf_matcher_vectors.utils.errors import ConfigNotFound, VectorConfigError
from etf_matcher_vectors.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _emit_payload(data: bytes, output: str | None) -> None:
    if output:
        atomic_write_bytes(output, data)
        print(f"Wrote {len(data)} bytes to {output}")
    else:
        print(f"Downloaded {len(data)} bytes")


def cmd_list(args: argparse.Namespace) -> int:
    catalog = get_all_configs()
    _print_json({key: catalog[key].as_dict() for key in sorted(catalog)})
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    record = get_config_by_key(args.key)
    _print_json({args.key: record.as_dict()})
    return 0


def cmd_url(args: argparse.Namespace) -> int:
    print(resolve_resource_url(args.path))
    return 0


def cmd_fetch(args: argparse.Namespace) -> int:
    _emit_payload(fetch_config_resource(args.key), args.output)
    return 0


def cmd_symbol_map(args: argparse.Namespace) -> int:
    _emit_payload(fetch_symbol_map(), args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="etf-matcher-vectors",
        description="Resolve and download ETF Matcher ticker vector collections",
        epilog=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Settings YAML (default: $ETF_MATCHER_CONFIG_PATH or the packaged config.yaml)",
    )
    parser.add_argument(
        "--catalog-file",
        metavar="PATH",
        help="Read the catalog from a local TOML manifest instead of the configured source",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Also write JSON logs to a daily-rotated file",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    sub = subparsers.add_parser("list", help="Print every configuration as JSON")
    sub.set_defaults(func=cmd_list)

    sub = subparsers.add_parser("show", help="Print one configuration as JSON")
    sub.add_argument("key")
    sub.set_defaults(func=cmd_show)

    sub = subparsers.add_parser("url", help="Print the download URL for a resource path")
    sub.add_argument("path")
    sub.set_defaults(func=cmd_url)

    sub = subparsers.add_parser("fetch", help="Download the collection for a key")
    sub.add_argument("key")
    sub.add_argument("-o", "--output", metavar="FILE", help="Write the payload to FILE")
    sub.set_defaults(func=cmd_fetch)

    sub = subparsers.add_parser("symbol-map", help="Download the ticker symbol map")
    sub.add_argument("-o", "--output", metavar="FILE", help="Write the payload to FILE")
    sub.set_defaults(func=cmd_symbol_map)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``etf-matcher-vectors`` command."""
    args = build_parser().parse_args(argv)

    if args.config:
        ConfigLoader.reset()
        ConfigLoader.load_config(args.config)
    setup_logging(args.log_file)

    if args.catalog_file:
        set_catalog_source(FileCatalogSource(args.catalog_file))

    try:
        return args.func(args)
    except ConfigNotFound as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except (VectorConfigError, AtomicWriteError) as e:
        logger.debug("Command %s failed", args.command, exc_info=e)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
