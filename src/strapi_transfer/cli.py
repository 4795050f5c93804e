"""Command line interface.

Usage:
    strapi-transfer export --url https://source.example.com --token $TOKEN
    strapi-transfer import --url http://localhost:1337 --file strapi-export.json \\
        --order api::author.author,api::article.article

Every flag can also be given through environment variables (see
``StrapiConfig``, ``ImportOptions`` and ``ExportOptions``); flags win.

Exit status: 0 on success, 1 if any entry failed to import, 2 if the
configuration or snapshot could not be loaded.
"""

import argparse
import logging
import sys
from collections.abc import Sequence

from .__version__ import __version__
from .client.sync_client import SyncClient
from .config_factory import ConfigFactory
from .exceptions import ConfigurationError, ImportExportError, StrapiError
from .export.exporter import StrapiExporter
from .export.importer import StrapiImporter
from .export.snapshot_io import load_snapshot

logger = logging.getLogger("strapi_transfer")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Send package logs to stderr with timestamps."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)


def _add_connection_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--url", dest="base_url", help="Strapi base URL (STRAPI_URL)")
    parser.add_argument("--token", dest="api_token", help="Admin token (STRAPI_ADMIN_TOKEN)")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument("--env-file", help="Read settings from this .env file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="strapi-transfer",
        description="Export Strapi content to a snapshot and replay it elsewhere.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser("export", help="Export all content to a snapshot")
    _add_connection_args(export_parser)
    export_parser.add_argument("--output", "--file", dest="output", help="Snapshot path")
    export_parser.add_argument("--page-size", type=int, help="Entries per listing page")
    export_parser.add_argument(
        "--collection", dest="collection_uids", help="Comma separated collection type UIDs"
    )
    export_parser.add_argument(
        "--single", dest="single_uids", help="Comma separated single type UIDs"
    )
    export_parser.set_defaults(handler=run_export)

    import_parser = subparsers.add_parser("import", help="Replay a snapshot")
    _add_connection_args(import_parser)
    import_parser.add_argument("--file", help="Snapshot path (STRAPI_EXPORT_FILE)")
    import_parser.add_argument(
        "--include-protected",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Disable the built-in protected UID list",
    )
    import_parser.add_argument(
        "--protected", dest="protected_uids", help="Comma separated UIDs to protect"
    )
    import_parser.add_argument("--order", help="Comma separated processing order")
    import_parser.add_argument(
        "--dry-run", action="store_true", default=None, help="Do not send write requests"
    )
    import_parser.set_defaults(handler=run_import)

    return parser


def run_export(args: argparse.Namespace) -> int:
    """Export content and write the snapshot file."""
    try:
        config = ConfigFactory.create(
            args.env_file, base_url=args.base_url, api_token=args.api_token, timeout=args.timeout
        )
        options = ConfigFactory.export_options(
            args.env_file,
            output=args.output,
            page_size=args.page_size,
            collection_uids=args.collection_uids,
            single_uids=args.single_uids,
        )
    except ConfigurationError as e:
        logger.error(str(e))
        return EXIT_CONFIG

    try:
        with SyncClient(config) as client:
            exporter = StrapiExporter(client, page_size=options.page_size)
            snapshot = exporter.export_snapshot(options.collection_uids, options.single_uids)
        exporter.save_to_file(snapshot, options.output)
    except StrapiError as e:
        logger.error(f"Export failed: {e}")
        return EXIT_FAILED

    return EXIT_OK


def run_import(args: argparse.Namespace) -> int:
    """Replay a snapshot file into the target instance."""
    try:
        config = ConfigFactory.create(
            args.env_file, base_url=args.base_url, api_token=args.api_token, timeout=args.timeout
        )
        options = ConfigFactory.import_options(
            args.env_file,
            file=args.file,
            include_protected=args.include_protected,
            protected_uids=args.protected_uids,
            order=args.order,
            dry_run=args.dry_run,
        )
        logger.info(f"Loading export file: {options.file}")
        snapshot = load_snapshot(options.file)
    except (ConfigurationError, ImportExportError) as e:
        logger.error(str(e))
        return EXIT_CONFIG

    with SyncClient(config) as client:
        result = StrapiImporter(client, options).import_snapshot(snapshot)

    return EXIT_OK if result.success else EXIT_FAILED


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``strapi-transfer`` console script."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
