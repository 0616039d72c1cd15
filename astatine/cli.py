"""Command-line front door for astatine.

Parses CLI options, loads the application catalog, and either prints the
ranked view or runs the interactive launcher.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from . import config
from .catalog.desktop import load_catalog
from .catalog.types import Candidate
from .logging_setup import setup_logging
from .runtime import run_interactive
from .search.fuzzy import ranked_matches
from .session.controller import LauncherSession
from .session.launch import spawn_detached

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="astatine",
        description="Fuzzy-search installed applications and launch the selected one.",
    )
    parser.add_argument("--query", default="", help="Initial search query.")
    parser.add_argument("--list", action="store_true", help="Print the ranked matches for --query and exit.")
    parser.add_argument("--dry-run", action="store_true", help="Print the launch command instead of running it.")
    parser.add_argument("--stay-open", action="store_true", help="Keep the launcher open after launching.")
    parser.add_argument("--icon-theme", default=None, help="Icon theme searched before hicolor.")
    parser.add_argument("--icon-size", type=_positive_int, default=None, help="Preferred icon size in pixels.")
    parser.add_argument(
        "--applications-dir",
        action="append",
        default=None,
        metavar="DIR",
        help="Extra directory of .desktop files (repeatable, searched first).",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ...).")
    return parser


def print_ranked(catalog: Sequence[Candidate], query: str) -> None:
    for candidate, _score in ranked_matches(catalog, query):
        sys.stdout.write(f"{candidate.name}\t{candidate.launch_command}\n")


def main() -> None:
    """Parse CLI arguments, load the catalog, and run the launcher."""
    args = build_parser().parse_args()
    setup_logging(args.log_level or config.load_log_level(), stream=args.list)

    extra_dirs = [Path(entry).expanduser() for entry in (args.applications_dir or [])]
    extra_dirs.extend(config.load_application_dirs())
    catalog = load_catalog(
        extra_dirs,
        icon_theme=args.icon_theme or config.load_icon_theme(),
        icon_size=args.icon_size or config.load_icon_size(),
    )

    if args.list:
        print_ranked(catalog, args.query)
        return

    dry_run_commands: list[str] = []

    def record_spawn(program: str, spawn_args: list[str]) -> None:
        dry_run_commands.append(" ".join([program, *spawn_args]))

    spawn = record_spawn if args.dry_run else spawn_detached
    session = LauncherSession(catalog, spawn=spawn)
    if args.query:
        session.handle_text(args.query)
    close_on_launch = config.load_close_on_launch() and not args.stay_open
    launched = run_interactive(session, close_on_launch=close_on_launch)
    for command in dry_run_commands:
        sys.stdout.write(command + "\n")
    if launched is not None:
        logger.info("session ended after launching %r", launched)


if __name__ == "__main__":
    main()
