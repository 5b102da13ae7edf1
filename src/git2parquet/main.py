"""Main CLI entry point for git2parquet."""

import argparse
import logging
import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from .config import ExportOptions
from .errors import Git2ParquetError
from .export import write_git_log_parquet
from .logging_utils import configure_logging
from .settings import get_viewer_command

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="git2parquet",
        description="Export git commit history with diffs to a Parquet file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  git2parquet                           # Export to gitlog.parquet
  git2parquet commits.parquet           # Export to commits.parquet
  git2parquet --open                    # Export and open with hyperparam
  git2parquet commits.parquet --open    # Export to commits.parquet and open
  git2parquet --workers 8               # Fetch diffs with 8 workers
        """,
    )

    parser.add_argument(
        "filename",
        nargs="?",
        help="Output parquet filename (default: gitlog.parquet)",
    )
    parser.add_argument(
        "--open",
        action="store_true",
        help="Open the parquet file with hyperparam after export",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of concurrent diff fetches (default: 1)",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: LOG_LEVEL env or WARNING)",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command line arguments."""
    if args.workers < 1:
        raise ValueError("--workers must be at least 1")


def create_options(args: argparse.Namespace) -> ExportOptions:
    """Create export options from command line arguments."""
    return ExportOptions(
        filename=args.filename,
        diff_workers=args.workers,
    )


def local_path(filename: str, cwd: Optional[str] = None) -> str:
    """Return ``filename`` relative to ``cwd`` when it lies beneath it."""
    base = Path(cwd or os.getcwd())
    try:
        return str(Path(filename).relative_to(base))
    except ValueError:
        return filename


def open_in_viewer(path: str, command: Optional[List[str]] = None) -> bool:
    """Launch the viewer on ``path``; return False if it could not run."""
    command = list(command or get_viewer_command())
    try:
        subprocess.run(command + [path], check=True)
        return True
    except (OSError, subprocess.CalledProcessError) as e:
        print(f"Failed to open with {command[-1]}: {e}", file=sys.stderr)
        print(f"\nView it manually with:\n  {shlex.join(command + [path])}\n")
        return False


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level, default_level="WARNING")

    try:
        validate_args(args)
        options = create_options(args)
        result = write_git_log_parquet(options)

    except Git2ParquetError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except Exception as e:
        logger.exception("Unexpected error during export")
        print(f"Error: Internal error: {e}", file=sys.stderr)
        return 1

    path = local_path(result.filename)
    viewer = get_viewer_command()
    print(f"✓ Exported {result.commit_count} commits to {Path(result.filename).name}.")

    if args.open:
        print(f"Opening {Path(result.filename).name} with {viewer[-1]}...")
        open_in_viewer(path, viewer)
    else:
        print(f"View it with:\n  {shlex.join(viewer + [path])}\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
