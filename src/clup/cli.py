#!/usr/bin/env python3
"""
clup CLI — find duplicate files and delete, move, or list them.
Exactly one copy of every group of identical files is kept: the oldest one.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
from pathlib import Path
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    from send2trash import send2trash  # noqa: F401
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash  # noqa: F401
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from clup.core.errors import ConfigurationError
from clup.core.models import CleanupParams, RunStatistics, DEFAULT_MAX_SIZE, DEFAULT_HASH_ALGORITHM
from clup.core.statistics import summary_lines
from clup.commands import CleanupCommand
from clup.services.action_service import DuplicateAction
from clup.services.report_service import ReportService
from clup.utils.convert_utils import ConvertUtils
from clup.aliases import (
    HASH_MODE_ALIASES, HASH_MODE_CHOICES, HASH_MODE_HELP_TEXT,
    HASH_ALGORITHM_CHOICES, HASH_ALGORITHM_HELP_TEXT,
    PRESET_ALIASES, PRESET_CHOICES, PRESET_HELP_TEXT,
    EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.verbose: bool = False
        self.quiet: bool = False

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        common = argparse.ArgumentParser(add_help=False)

        source = common.add_argument_group("source")
        source.add_argument(
            "--source", "-s",
            type=str,
            help="Source directory to scan for duplicates"
        )
        source.add_argument(
            "--source-current",
            action="store_true",
            help="Use the current working directory as source"
        )

        filters = common.add_argument_group("filters")
        filters.add_argument(
            "--include", "-i",
            default="",
            type=str,
            metavar='EXT[,EXT]',
            help="Comma separated extensions to look for (e.g., jpg,png). Default: all files"
        )
        filters.add_argument(
            "--exclude", "-e",
            default="",
            type=str,
            metavar='EXT[,EXT]',
            help="Comma separated extensions to skip, when --include is not used"
        )
        filters.add_argument(
            "--preset", "-p",
            choices=PRESET_CHOICES,
            default=None,
            type=str,
            help=PRESET_HELP_TEXT
        )
        filters.add_argument(
            "--minsize", "-m",
            default="0",
            type=str,
            metavar='SIZE',
            help="Minimum file size (e.g., 500KB, 1MB). Default: 0"
        )
        filters.add_argument(
            "--maxsize", "-M",
            default=str(DEFAULT_MAX_SIZE),
            type=str,
            metavar='SIZE',
            help="Maximum file size (e.g., 10MB, 1GB). Default: 100MB"
        )
        filters.add_argument(
            "--hash", "-H",
            choices=HASH_MODE_CHOICES,
            default="content",
            type=str,
            help=HASH_MODE_HELP_TEXT
        )
        filters.add_argument(
            "--algorithm", "-a",
            choices=HASH_ALGORITHM_CHOICES,
            default=DEFAULT_HASH_ALGORITHM,
            type=str,
            help=HASH_ALGORITHM_HELP_TEXT
        )

        output = common.add_argument_group("output")
        output.add_argument(
            "--workers", "-w",
            default=None,
            type=int,
            metavar='N',
            help="Number of worker threads. Default: chosen by Python"
        )
        output.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        output.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show additional statistics and skipped files"
        )

        parser = argparse.ArgumentParser(
            prog="clup",
            description="clup — keep one copy of every duplicate file",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )
        commands = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

        delete = commands.add_parser(
            "delete", parents=[common], formatter_class=argparse.RawTextHelpFormatter,
            help="Delete duplicate files, keeping the oldest copy"
        )
        delete.add_argument(
            "--trash",
            action="store_true",
            help="Move duplicates to the system trash instead of deleting them permanently"
        )
        CLIApplication._add_log_arguments(delete)

        move = commands.add_parser(
            "move", parents=[common], formatter_class=argparse.RawTextHelpFormatter,
            help="Move duplicate files into a target directory"
        )
        move.add_argument(
            "--target", "-t",
            required=True,
            type=str,
            help="Directory to move duplicates into (created if missing)"
        )
        CLIApplication._add_log_arguments(move)

        listing = commands.add_parser(
            "list", parents=[common], formatter_class=argparse.RawTextHelpFormatter,
            help="Write the list of duplicate files into a report"
        )
        listing.add_argument(
            "--target", "-t",
            default=None,
            type=str,
            help="Directory for the report file. Default: the source directory"
        )

        return parser.parse_args(args)

    @staticmethod
    def _add_log_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--logdir", "-l",
            default=None,
            type=str,
            help="Directory where a report of the processed files is written"
        )
        parser.add_argument(
            "--logdir-root",
            action="store_true",
            help="Write the report into the source directory"
        )

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate option combinations that argparse cannot express."""
        if args.source and args.source_current:
            self.error_exit("The --source-current and --source options can't be used at the same time")
        if not args.source and not args.source_current:
            self.error_exit("The source directory can't be empty (use --source or --source-current)")

        if getattr(args, "logdir", None) and getattr(args, "logdir_root", False):
            self.error_exit("The --logdir-root and --logdir options can't be used at the same time")

    def create_params(self, args: argparse.Namespace) -> CleanupParams:
        """Create CleanupParams from CLI arguments."""
        source_dir = os.getcwd() if args.source_current else str(Path(args.source).resolve())
        try:
            return CleanupParams.from_human_readable(
                source_dir=source_dir,
                min_size_str=args.minsize,
                max_size_str=args.maxsize,
                include_str=args.include,
                exclude_str=args.exclude,
                preset=PRESET_ALIASES.get(args.preset) if args.preset else None,
                hash_mode=HASH_MODE_ALIASES[args.hash],
                verbose=args.verbose,
                max_workers=args.workers,
                hash_algorithm=args.algorithm,
            )
        except ConfigurationError as e:
            self.error_exit(str(e))

    def create_action(self, args: argparse.Namespace) -> DuplicateAction:
        if args.command == "delete":
            return DuplicateAction.delete(use_trash=args.trash)
        if args.command == "move":
            target = Path(args.target).resolve()
            if target.exists() and not target.is_dir():
                self.error_exit(f"The target path is not a directory: {args.target}")
            return DuplicateAction.move(str(target))
        return DuplicateAction.record()

    @staticmethod
    def report_dir(args: argparse.Namespace, params: CleanupParams) -> Optional[str]:
        """Where the report goes, or None when no report was requested."""
        if args.command == "list":
            return args.target or params.source_dir
        if args.logdir_root:
            return params.source_dir
        return args.logdir

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files found...")
        sys.stderr.flush()

    def output_results(self, stats: RunStatistics) -> None:
        """Print every group with its survivor first."""
        if self.quiet or not stats.groups:
            return

        for idx, (key, files) in enumerate(stats.groups.items(), 1):
            size_str = ConvertUtils.bytes_to_human(files[0].size)
            print(f"\n📁 Group {idx} | Size: {size_str} | Files: {len(files)} | {key}")
            print(f"   [KEEP] {files[0].path}")
            for file in files[1:]:
                print(f"   [DUP]  {file.path}")

    def output_summary(self, stats: RunStatistics, failures: List) -> None:
        if self.quiet:
            return
        print("==== DONE ====")
        for line in summary_lines(stats, verbose=self.verbose):
            print(line)
        if failures:
            print(f"\n⚠️  {len(failures)} file(s) could not be processed:")
            for error in failures[:5]:
                print(f"  • {error.path}: {error.reason}")
            if len(failures) > 5:
                print(f"  ...and {len(failures) - 5} more files")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> int:
        """Main entry point. Returns the process exit status."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        if self.verbose:
            logging.getLogger("clup").setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)
        action = self.create_action(args)

        if not self.quiet:
            print("==== START ====")
            print(f"Scanning directory: {params.source_dir}")

        command = CleanupCommand()
        try:
            stats = command.execute(
                params,
                action,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except ConfigurationError as e:
            self.error_exit(str(e))

        if self.verbose:
            sys.stderr.write("\n")

        if len(command.get_files()) < 2 and not self.quiet:
            print("No files found.")
        elif not stats.groups and not self.quiet:
            print("No duplicate groups found.")

        if args.command == "list" or self.verbose:
            self.output_results(stats)
        self.output_summary(stats, command.dispatcher.failures)

        report_dir = self.report_dir(args, params)
        if report_dir:
            try:
                report_path = ReportService.write_report(report_dir, params, stats, action_name=args.command)
            except OSError as e:
                self.warning(f"Cannot write report into {report_dir}: {e}")
            else:
                if not self.quiet:
                    print(f"Report written to {report_path}")
        return 0


def main(argv=None) -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        code = app.run(argv)
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
