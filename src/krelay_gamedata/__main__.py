"""
Main entry point for krelay-gamedata.
Usage: python -m krelay_gamedata [--settings FILE] [--json] [--dump DATASET]
"""

import argparse
import logging
import sys
from typing import List, Optional

import orjson

from . import __version__
from .game_data import DATASET_NAMES, GameDataService
from .settings import AppSettings
from .utils.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="krelay-gamedata",
        description="Load K Relay game data and report what could be loaded.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--settings",
        metavar="FILE",
        help="INI settings file to use instead of the platform settings store",
    )
    parser.add_argument(
        "--json", action="store_true", help="print the load report as JSON"
    )
    parser.add_argument(
        "--dump",
        metavar="DATASET",
        choices=DATASET_NAMES,
        help=f"print every entry of a dataset as JSON ({', '.join(DATASET_NAMES)})",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    logger = logging.getLogger(f"{__name__}.main")

    settings = AppSettings(settings_file=args.settings)
    setup_logging(settings)
    logger.info(f"Configuration loaded from {settings.get_settings_file_path()}")

    validation = settings.validate()
    for warning in validation.warnings:
        logger.warning(f"  {warning}")
    if not validation.is_valid:
        logger.error("Configuration validation failed:")
        for error in validation.errors:
            logger.error(f"  {error}")
        return 1

    service = GameDataService.from_settings(settings)
    report = service.load()

    if args.json:
        sys.stdout.buffer.write(orjson.dumps(report.to_dict(), option=orjson.OPT_INDENT_2))
        sys.stdout.buffer.write(b"\n")

    if args.dump:
        store = service.registry.get(args.dump)
        if store is None:
            logger.error(f"{args.dump} is not loaded, nothing to dump")
            return 1
        sys.stdout.buffer.write(
            orjson.dumps(
                list(store.values()),
                option=orjson.OPT_INDENT_2,
            )
        )
        sys.stdout.buffer.write(b"\n")

    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
