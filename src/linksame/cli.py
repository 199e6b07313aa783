#!/usr/bin/env python3
"""
LinkSame CLI: command line interface for replacing identical files with links.
Nothing is written unless --write is given; without it the run only reports
what would have been linked.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
import logging
from typing import Optional, NoReturn, List

from linksame.core.models import LinkParams, LinkStats, LinkOutcome
from linksame.commands import LinkSameCommand
from linksame.core.scanner import normalize_roots
from linksame.utils.convert_utils import ConvertUtils
from linksame.aliases import DESCRIPTION_TEXT, UPDATE_HELP_TEXT, PATTERN_HELP_TEXT, EPILOG_TEXT

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="linksame",
            description=DESCRIPTION_TEXT,
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "roots",
            nargs="*",
            metavar="root",
            help="Directories to search for identical files. Default: current directory"
        )

        # Link options
        parser.add_argument(
            "--write", "-w",
            action="store_true",
            dest="write_links",
            help="Write links to file system"
        )
        parser.add_argument(
            "--symlink",
            action="store_true",
            help="Link files using only symlinks"
        )
        parser.add_argument(
            "--absolute",
            action="store_true",
            help="Use absolute instead of relative symlinks"
        )
        parser.add_argument(
            "--safe",
            action="store_true",
            help="Do not link files with different permissions or ownership"
        )

        # Filtering options
        parser.add_argument(
            "--update",
            default="",
            type=str,
            metavar="FILE",
            help=UPDATE_HELP_TEXT
        )
        parser.add_argument(
            "--pattern",
            default="",
            type=str,
            metavar="GLOB",
            help=PATTERN_HELP_TEXT
        )
        parser.add_argument(
            "--jobs", "-j",
            default=None,
            type=int,
            metavar="N",
            help="Number of worker threads hashing and linking size groups. Default: automatic"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Quiet - suppress output messages and warnings"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Verbose - print individual link creation messages"
        )

        return parser.parse_args(args)

    def configure_logging(self) -> None:
        """Route engine messages to stderr; -q and -v only change what is shown."""
        if self.quiet:
            level = logging.ERROR
        elif self.verbose:
            level = logging.INFO
        else:
            level = logging.WARNING
        logging.basicConfig(level=level, format=LOG_FORMAT, force=True)

    def create_params(self, args: argparse.Namespace) -> LinkParams:
        """Create LinkParams from CLI arguments."""
        try:
            return LinkParams(
                roots=args.roots,
                pattern=args.pattern,
                write_links=args.write_links,
                symlink_only=args.symlink,
                absolute_symlinks=args.absolute,
                safe_mode=args.safe,
                workers=args.jobs
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} processed...")
        sys.stderr.flush()

    def run_linking(self, params: LinkParams, update_file: str = "") -> LinkStats:
        """Execute the linking workflow."""
        command = LinkSameCommand()
        if update_file:
            if not self.quiet:
                print(f"Linking {update_file} to identical files in {self._join(params.roots)}")
            return command.execute_update(update_file, params)

        if not self.quiet:
            print(f"Linking identical files in {self._join(params.roots)}")
        stats = command.execute(
            params,
            progress_callback=self.progress_callback if self.verbose else None
        )
        if self.verbose:
            sys.stderr.write("\n")
        return stats

    def output_results(self, stats: LinkStats, write_links: bool) -> None:
        """Print the final summary."""
        if self.quiet:
            return

        print()
        if not write_links:
            print("If writing links (-w), would have...")
        print(f"Replaced {stats.links} files with links")
        print(f"Reduced storage by {ConvertUtils.bytes_to_human(stats.bytes_saved)}")
        if self.verbose and (stats.skipped or stats.failed):
            print(f"{LinkOutcome.SKIPPED.display_name}: {stats.skipped} files")
            print(f"{LinkOutcome.FAILED.display_name}: {stats.failed} files")

    @staticmethod
    def _join(roots: List[str]) -> str:
        return ", ".join(roots)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point; quiet always overrides verbose."""
        args = self.parse_args(argv)
        self.quiet = args.quiet
        self.verbose = args.verbose and not args.quiet
        self.configure_logging()

        try:
            # Fatal root errors are reported before anything is printed or changed
            args.roots = normalize_roots(args.roots)
            params = self.create_params(args)
            stats = self.run_linking(params, update_file=args.update)
        except (OSError, RuntimeError, ValueError) as e:
            self.error_exit(str(e))

        self.output_results(stats, params.write_links)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\nCompleted in {elapsed:.2f} seconds")


def main(argv=None) -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run(argv)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    main()
