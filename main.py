# main.py

"""Entry point for vendor_feed (HTTP server or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("vendor_feed.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="vendor_feed",
        description="Aggregated product catalog over multiple vendor feeds.",
        epilog=f"Configured vendors: {', '.join(Settings.COMPANIES)}",
    )
    parser.add_argument(
        "category",
        nargs="?",
        default=None,
        help="Category to query. Omit to start the HTTP server.",
    )
    parser.add_argument(
        "-n",
        default=None,
        help=f"Page size (1-{Settings.MAX_PRODUCTS_PER_PAGE}).",
    )
    parser.add_argument("--page", default=None, help="Page number (default: 1).")
    parser.add_argument("--sort", default=None, help="Field to sort by.")
    parser.add_argument(
        "--order",
        choices=["asc", "desc"],
        default=None,
        help="Sort order (default: asc).",
    )
    parser.add_argument("--min-price", default=None, dest="min_price")
    parser.add_argument("--max-price", default=None, dest="max_price")
    parser.add_argument(
        "--product-id",
        default=None,
        dest="product_id",
        help="Look up a single product instead of listing.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument("--host", default=Settings.HOST)
    parser.add_argument("--port", type=int, default=Settings.PORT)
    return parser


def _run_server(args: argparse.Namespace) -> None:
    """Serve the HTTP API with uvicorn."""
    import uvicorn

    from src.api.app import create_app

    try:
        # Server records go through setup_logging, not uvicorn's dictConfig
        uvicorn.run(
            create_app(), host=args.host, port=args.port, log_config=None,
        )
    except Exception:
        logger.critical("Fatal error in HTTP server", exc_info=True)
        raise
    finally:
        logger.info("vendor_feed server shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run a headless listing or lookup and exit."""
    from src.cli.runner import cli_find, cli_list

    if args.product_id is not None:
        exit_code = asyncio.run(
            cli_find(args.category, args.product_id, args.output_format)
        )
    else:
        exit_code = asyncio.run(
            cli_list(
                args.category,
                n=args.n,
                page=args.page,
                sort=args.sort,
                order=args.order,
                min_price=args.min_price,
                max_price=args.max_price,
                output_format=args.output_format,
            )
        )
    sys.exit(exit_code)


def main() -> None:
    """Route to the HTTP server (no category) or the headless CLI."""
    log_file = setup_logging()
    logger.info("vendor_feed starting, log file: %s", log_file)

    args = _build_parser().parse_args()

    if args.category is None:
        _run_server(args)
    else:
        _run_cli(args)


if __name__ == "__main__":
    main()
