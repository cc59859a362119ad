#!/usr/bin/env python3
"""
filesequencer: Rename image and video files to sequential numbers.

Run from the directory to process. Eligible files are renamed to 1, 2, 3, ...
(keeping their extension), ordered by any number already in their name.

Flags:
- -r: recurse into child folders
- -a: move animated file types into an "Animated" subdirectory
- -help: print the flags above
"""

from __future__ import annotations

# Standard library imports
import argparse
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

# Third-party imports
from rich.prompt import Confirm

# Local application imports
from ..config import AppConfig, RunConfig, create_config_from_env
from ..core.errors import InvalidStartingPathError, MoveFailureError
from ..core.types import EligibleFile
from ..output.logger import SimpleLogger
from ..processing.renamer import Renamer
from ..utils.path import assert_valid_start, count_affected_folders, count_extensions, list_eligible_files

HELP_LINES = (
    "Parameters:",
    "  -r: Recurse child folders",
    "  -a: Separate animated filetypes into a new directory",
)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Read the presence-based CLI flags.

    Each flag must appear as a whole token; anything else (including clustered
    forms such as "-ar" or "-r=yes") is ignored rather than rejected.
    """
    tokens = set(sys.argv[1:] if argv is None else argv)
    return argparse.Namespace(
        show_help="-help" in tokens,
        recursive="-r" in tokens,
        move_animated="-a" in tokens,
    )


def build_run_config(args: argparse.Namespace, start_path: Path | None = None) -> RunConfig:
    """Create a RunConfig from parsed args; the start path defaults to the working directory."""
    return RunConfig(
        start_path=start_path if start_path is not None else Path.cwd().resolve(),
        recursive=args.recursive,
        move_animated=args.move_animated,
        show_help=args.show_help,
    )


def write_help(logger: SimpleLogger) -> None:
    for line in HELP_LINES:
        logger.log(line)


# ------------------------------
# Preview and confirmation
# ------------------------------


def display_files_found(logger: SimpleLogger, files: list[EligibleFile]) -> None:
    logger.log("")
    logger.log(f"Files found: {len(files)}")


def display_affected_file_types(logger: SimpleLogger, files: list[EligibleFile]) -> None:
    """Show one row per extension with its file count."""
    counts = count_extensions(files)
    logger.table(["Extension", "Count"], [[ext, str(count)] for ext, count in counts.items()])


def confirmation_question(run: RunConfig, affected_folders: int) -> str:
    question = "Rename files to sequential names?"
    if run.recursive:
        plural = "S" if affected_folders > 1 else ""
        question += f" (RECURSIVE: {affected_folders} FOLDER{plural} AFFECTED!)"
    return question


def confirm_start(
    run: RunConfig,
    app: AppConfig,
    logger: SimpleLogger,
    ask: Callable[[str], bool] | None = None,
) -> bool:
    """Ask the user whether to proceed; recursive runs report how many folders are affected."""
    affected = 0
    if run.recursive:
        affected = count_affected_folders(run.start_path, app.traversal.animated_dir_name)

    logger.log("")
    logger.log(f"Working path: {run.start_path}")

    ask = ask or (lambda q: Confirm.ask(q, console=logger.console))
    return ask(confirmation_question(run, affected))


def print_summary(logger: SimpleLogger, renamer: Renamer) -> None:
    s = renamer.summary
    logger.section("Summary")
    rows = [
        ["Folders processed:", str(s.directories)],
        ["Files renamed:", str(s.renamed)],
        ["Already in place:", str(s.skipped)],
    ]
    if renamer.run.move_animated:
        rows.append(["Animated moved:", str(s.moved_animated)])
    for label, value in rows:
        logger.log(f"{label:<20} {value}")


def main(
    argv: Sequence[str] | None = None,
    *,
    app: AppConfig | None = None,
    logger: SimpleLogger | None = None,
    ask: Callable[[str], bool] | None = None,
) -> int:
    """CLI entry point."""
    args = parse_args(argv)
    app = app or create_config_from_env()
    logger = logger or SimpleLogger(app.log_file)

    run = build_run_config(args)
    if run.show_help:
        write_help(logger)

    try:
        assert_valid_start(run.start_path, app.traversal.min_path_depth)
    except InvalidStartingPathError as ex:
        logger.error(str(ex))
        return 1

    files = list_eligible_files(run.start_path, app.file_extensions)
    display_files_found(logger, files)
    if not files:
        logger.warning("No files found!")
        return 0

    display_affected_file_types(logger, files)

    try:
        if not confirm_start(run, app, logger, ask):
            logger.log("Process aborted!")
            return 0

        renamer = Renamer(run, app.file_extensions, app.traversal, logger)
        renamer.start()
    except MoveFailureError as ex:
        logger.error("Cannot move file:")
        logger.error(f"  From : {ex.source}")
        logger.error(f"  To   : {ex.destination}")
        if ex.reason:
            logger.error(f"  Why  : {ex.reason}")
        return 1
    except (KeyboardInterrupt, EOFError):
        logger.error("Interrupted.")
        return 1

    print_summary(logger, renamer)
    return 0


if __name__ == "__main__":
    sys.exit(main())
