"""Command-line front door for fuzzyfind.

Loads configuration, opens a project session, and either prints project
lists directly or runs the interactive picker. The chosen path is the only
thing written to stdout so a shell function can ``cd`` into it.
"""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import replace
from pathlib import Path

import structlog

from .config import FinderConfig, load_finder_config
from .logging_setup import configure_logging
from .picker import run_picker
from .session import open_session

logger = structlog.get_logger(__name__)

EXIT_SELECTED = 0
EXIT_NO_SELECTION = 1
EXIT_NO_PROJECTS = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fuzzyfind",
        description="Fuzzy-find a project directory and print its path.",
    )
    parser.add_argument("query", nargs="?", default="", help="Initial picker query.")
    parser.add_argument("--config", type=Path, default=None, help="Path to a JSON config file.")
    parser.add_argument("--rescan", action="store_true", help="Ignore the cache and rescan before starting.")
    parser.add_argument("--list", action="store_true", help="Print every known project and exit.")
    parser.add_argument("--filter", metavar="QUERY", default=None, help="Print ranked matches for QUERY and exit.")
    parser.add_argument(
        "--wait-for-rescan",
        action="store_true",
        help="Wait for the background rescan to write the cache before exiting.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug events to stderr.")
    return parser


def _print_paths(paths: list[str]) -> None:
    # Paths go out as raw bytes: undecodable names carry surrogate escapes.
    sys.stdout.flush()
    out = sys.stdout.buffer
    for path in paths:
        out.write(os.fsencode(path) + b"\n")
    out.flush()


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments, run one invocation, and return its exit status."""
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING")

    config: FinderConfig = load_finder_config(args.config)
    if args.wait_for_rescan:
        config = replace(config, wait_for_rescan=True)

    session = open_session(config, force_rescan=args.rescan)
    try:
        index = session.index
        logger.debug("session_opened", projects=len(index), from_cache=session.from_cache)
        if not len(index):
            sys.stderr.write("No projects found.\n")
            return EXIT_NO_PROJECTS

        if args.list:
            _print_paths(index.all_projects())
            return EXIT_SELECTED

        if args.filter is not None:
            result = index.filter(args.filter)
            _print_paths(result.paths)
            return EXIT_SELECTED if result.paths else EXIT_NO_SELECTION

        selection = run_picker(index, initial_query=args.query, prefix=config.display_prefix_to_strip)
        if selection is None:
            sys.stderr.write("No selection\n")
            return EXIT_NO_SELECTION
        _print_paths([selection])
        return EXIT_SELECTED
    finally:
        session.finish()


def run() -> None:
    """Console-script entrypoint."""
    raise SystemExit(main())


if __name__ == "__main__":
    run()
