"""Entry-point for launching the CLI application."""
from __future__ import annotations

import argparse
import logging
from typing import Sequence

from .presentation.cli import render
from .presentation.cli.app import main as cli_main
from .presentation.cli.config import load_config


def setup_logging(verbose: bool = False, level_name: str = "WARNING") -> None:
    """Configure developer diagnostics; player-facing messages go through the hooks."""
    level = logging.DEBUG if verbose or render.debug_enabled() else getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ffc", description="Fighting Fantasy gamebook companion.")
    parser.add_argument("--book", help="Book to preselect for a new game.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Run the CLI presentation layer."""
    args = build_parser().parse_args(argv)
    config = load_config()
    setup_logging(args.verbose, config["log_level"])
    cli_main(default_book=args.book)


if __name__ == "__main__":
    main()
