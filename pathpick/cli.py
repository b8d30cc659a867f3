"""Command-line front door for pathpick.

Parses CLI options, resolves the starting directory, and loads preferences.
Then runs the interactive picker and prints the chosen path to stdout.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .clipboard import copy_text_to_clipboard
from .config import load_log_file, load_log_level, load_quick_step, load_theme_name
from .errors import ClipboardError, FatalIOError
from .logging_config import configure_logging
from .runtime import run_picker
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)


EXAMPLES = """\
examples:
  pathpick
  pathpick /home/me
  cd "$(pathpick)"
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathpick",
        usage="pathpick [options] [directory]",
        description="Terminal file picker: browse a directory, pick an entry, and print its absolute path.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    # Extra positionals are accepted here and reported as invalid arguments in main().
    parser.add_argument("paths", nargs="*", metavar="directory", help="Starting directory. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--no-clipboard",
        action="store_true",
        help="Print the selected path without copying it to the clipboard.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    return parser


def resolve_start_directory(arg: str | None, default_path: Path | None = None) -> Path:
    """Return the absolute directory to start browsing in.

    A path naming a file resolves to the directory containing it.
    """
    if arg is None:
        raw = default_path if default_path is not None else Path.cwd()
    else:
        raw = Path(arg.strip())
    path = Path(os.path.abspath(raw))
    try:
        is_dir = path.is_dir()
        exists = is_dir or path.exists()
    except OSError as exc:
        raise SystemExit(f"Error: Failed to stat directory '{path}': {exc}") from exc
    if not exists:
        raise SystemExit(f"Error: Directory '{path}' does not exist")
    if not is_dir:
        return path.parent
    return path


def _print_usage_for_invalid_arguments(parser: argparse.ArgumentParser) -> None:
    sys.stdout.write("Error: Invalid arguments\n\n")
    parser.print_help(sys.stdout)


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and run the picker.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. More than one positional argument prints usage and
    returns without error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if len(args.paths) > 1:
        _print_usage_for_invalid_arguments(parser)
        return

    directory = resolve_start_directory(args.paths[0] if args.paths else None, default_path)

    log_file = args.log_file if args.log_file is not None else load_log_file()
    log_level = load_log_level()
    if log_level is None and args.log_file is not None:
        log_level = logging.DEBUG
    configure_logging(log_file, log_level)

    no_color = args.no_color or bool(os.environ.get("NO_COLOR"))
    theme = resolve_theme(args.theme or load_theme_name(), no_color=no_color)
    copy_to_clipboard = None if args.no_clipboard else copy_text_to_clipboard

    logger.info("starting in %s", directory)
    try:
        action = run_picker(
            directory,
            theme=theme,
            quick_step=load_quick_step(),
            copy_to_clipboard=copy_to_clipboard,
        )
    except ClipboardError as exc:
        logger.error("clipboard copy failed: %s", exc)
        raise SystemExit(f"Error: Failed to copy selection to clipboard: {exc}") from exc
    except FatalIOError as exc:
        logger.error("fatal: %s", exc)
        raise SystemExit(f"Error: {exc}") from exc

    if action.output is not None:
        # Paths are raw bytes on disk; undecodable names round-trip via fsencode.
        sys.stdout.flush()
        sys.stdout.buffer.write(os.fsencode(action.output))
        sys.stdout.buffer.flush()
    if action.status:
        raise SystemExit(action.status)


if __name__ == "__main__":
    main()
