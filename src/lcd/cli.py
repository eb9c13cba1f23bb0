"""
Command line interface for lcd.

Parses flags, keeps the snapshot up to date and hands the resolved directory
to the requested action: print it, copy it, or enter it in a new shell.
"""

import sys
import argparse
import logging
from typing import List, Optional

from . import __version__
from .config import ConfigurationError, load_config
from .tools.errors import LcdError, SnapshotIOError
from .tools.indexer import SnapshotIndexer, read_snapshot_root
from .tools.resolver import SnapshotResolver
from .tools.launcher import ClipboardError, LaunchError, copy_to_clipboard, enter_directory


logger = logging.getLogger(__name__)

DESCRIPTION = """\
Fast directory navigation using a cached directory tree (~/.lcd-tree.txt).
The first run indexes your home directory automatically.
Typing exit in the new shell brings you back to the old directory."""

EPILOG = """\
Search logic:
  1. Searches for an exact match (case-insensitive) of the directory name.
  2. If not found, searches for a partial match.
  Among several matches the shortest path wins."""


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="lcd",
        usage="lcd [options] <directory_name_or_fragment>",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("terms", nargs="*", help="Directory name or fragment to search for")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show detailed logs during operation")
    parser.add_argument("--print", dest="print_only", action="store_true",
                        help="Print the found path to stdout (do not cd)")
    parser.add_argument("--copy", dest="copy_to_clip", action="store_true",
                        help="Copy the found path to the system clipboard")
    parser.add_argument("--rescan", action="store_true", help="Force a rescan of the filesystem")
    parser.add_argument("--newbasedir", metavar="DIR", default=None,
                        help="Set a new root directory for scanning (implies --rescan)")
    parser.add_argument("--config", metavar="FILE", default=None, help="Use this YAML configuration file")
    parser.add_argument("--version", action="store_true", help="Show version info")
    parser.add_argument("-h", "--help", action="store_true", help="Show this help message")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _fail(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def run(argv: Optional[List[str]] = None) -> int:
    """
    Run lcd with the given arguments.

    Args:
        argv: Command line arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Process exit status. Does not return when a directory is entered.
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.help:
        parser.print_help()
        return 1

    if args.version:
        print(f"lcd version {__version__}")
        return 1

    configure_logging(args.verbose)

    try:
        config = load_config(args.config).config
    except ConfigurationError as e:
        return _fail(str(e))

    term = " ".join(args.terms)
    snapshot_path = config.get_snapshot_path()
    rescan = args.rescan

    if not snapshot_path.exists():
        logger.info(f"Database not found at {snapshot_path}. Initializing...")
        rescan = True

    if args.newbasedir:
        root = args.newbasedir
        rescan = True
    else:
        root = read_snapshot_root(snapshot_path) or config.get_default_root()

    if rescan:
        print(f"(Re-)Scanning directory tree from {root}", file=sys.stderr)
        try:
            stats = SnapshotIndexer(config).build_snapshot(root)
        except SnapshotIOError as e:
            return _fail(f"Error generating database: {e}")
        logger.info(f"Scan complete. Database saved: {stats}")

        if not term:
            print("Database updated.", file=sys.stderr)
            return 1

    if not term:
        return _fail("Please provide a directory name to search for.")

    try:
        match = SnapshotResolver(config).resolve(term).path
    except LcdError as e:
        return _fail(str(e))

    if args.print_only:
        print(match)
        return 0

    if args.copy_to_clip:
        try:
            copy_to_clipboard(match, config)
        except ClipboardError as e:
            return _fail(f"Failed to copy to clipboard: {e}")
        print(f"Copied to clipboard: {match}")
        return 0

    try:
        enter_directory(match, config)
    except LaunchError as e:
        return _fail(str(e))
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
