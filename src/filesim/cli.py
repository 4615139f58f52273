#!/usr/bin/env python3
"""
FileSim CLI — Command line interface for grouping similar files.
Groups files by filename similarity or by content (hash, size and name).
All operations are safe: deletion moves files to system trash, never permanent erase.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
import logging
from pathlib import Path
from typing import List, Optional, NoReturn

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import rapidfuzz
except ImportError:
    _MISSING_DEPS.append("rapidfuzz")

try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

try:
    from send2trash import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    print("\nOr install the package with its dependencies:", file=sys.stderr)
    print("   pip install filesim", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from filesim import __version__
from filesim.core.models import ClusteringParams, ClusteringResult, ClusterMode, Group
from filesim.commands import ClusteringCommand
from filesim.utils.convert_utils import ConvertUtils
from filesim.services.file_service import FileService
from filesim.services.group_service import GroupService
from filesim.services.input_service import InputService
from filesim.services.report_service import ReportService
from filesim.aliases import (
    ALGORITHM_ALIASES, ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT,
    MODE_ALIASES, MODE_CHOICES, MODE_HELP_TEXT,
    FORMAT_ALIASES, FORMAT_CHOICES,
    HASH_ALIASES, HASH_CHOICES, HASH_HELP_TEXT,
    EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding='utf-8')
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="filesim",
            description="FileSim — Group files by name or content similarity",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Inputs
        parser.add_argument(
            "files",
            nargs="*",
            metavar="FILE",
            help="File names to analyze"
        )
        parser.add_argument(
            "--input-file", "-i",
            type=str,
            metavar='',
            dest="input_file",
            help="Read file names from a file (one per line, '#' starts a comment)"
        )
        parser.add_argument(
            "--discover", "-d",
            type=str,
            metavar='',
            help="Discover files recursively in a directory"
        )
        parser.add_argument(
            "--excluded-dirs", '-e',
            nargs="+",
            default=[],
            type=str,
            metavar='',
            dest="excluded_dirs",
            help="Directories (space separated) ignored by --discover"
        )

        # Clustering options
        parser.add_argument(
            "--threshold", "-t",
            default=70,
            type=int,
            metavar='',
            help="Similarity threshold percentage (0-100). Default: 70"
        )
        parser.add_argument(
            "--algorithm", "-a",
            choices=ALGORITHM_CHOICES,
            default="auto",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--mode",
            choices=MODE_CHOICES,
            default="name",
            type=str,
            help=MODE_HELP_TEXT
        )
        parser.add_argument(
            "--min-group-size",
            default=2,
            type=int,
            metavar='',
            dest="min_group_size",
            help="Minimum files per group (name mode only; content mode groups any matching pair). Default: 2"
        )
        parser.add_argument(
            "--case-sensitive",
            action="store_true",
            dest="case_sensitive",
            help="Enable case-sensitive matching"
        )
        parser.add_argument(
            "--hash",
            choices=HASH_CHOICES,
            default="sha256",
            type=str,
            help=HASH_HELP_TEXT
        )
        parser.add_argument(
            "--workers",
            default=None,
            type=int,
            metavar='',
            help="Threads used to hash files in content mode. Default: CPU count"
        )

        # Output options
        parser.add_argument(
            "--format", "-f",
            choices=FORMAT_CHOICES,
            default="text",
            type=str,
            help="Output format. Default: text"
        )
        parser.add_argument(
            "--output", "-o",
            type=str,
            metavar='',
            help="Write results to a file instead of stdout"
        )
        parser.add_argument(
            "--hide-ungrouped",
            action="store_true",
            dest="hide_ungrouped",
            help="Do not list files that were not grouped"
        )

        # Actions
        parser.add_argument(
            "--keep-one",
            action="store_true",
            help="Keep the first file of each group and move the rest to trash (content mode only). "
                 "Always shows preview before deletion for safety."
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip confirmation prompt when used with --keep-one (for automation/scripts)"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed statistics and progress"
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.threshold < 0 or args.threshold > 100:
            self.error_exit(f"Threshold must be between 0 and 100, got: {args.threshold}")

        if args.min_group_size < 2:
            self.error_exit(f"Minimum group size must be at least 2, got: {args.min_group_size}")

        if args.workers is not None and args.workers < 1:
            self.error_exit(f"Worker count must be at least 1, got: {args.workers}")

        if args.force and not args.keep_one:
            self.error_exit("--force can only be used with --keep-one")

        if args.keep_one and args.mode != "content":
            self.error_exit("--keep-one requires --mode content (name mode has no file paths to delete)")

        # Prevent interactive confirmation in non-TTY environments
        if args.keep_one and not args.force:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Cannot request interactive confirmation in non-interactive session.\n"
                    "Use --force flag to proceed without confirmation when piping output or running in scripts."
                )

        if args.discover:
            discover_path = Path(args.discover)
            if not discover_path.exists():
                self.error_exit(f"Directory does not exist: {args.discover}")
            if not discover_path.is_dir():
                self.error_exit(f"Path is not a directory: {args.discover}")

        for excl_dir in args.excluded_dirs:
            excl_path = Path(excl_dir).resolve()
            if not excl_path.exists():
                self.warning(f"Excluded directory not found: {excl_dir}")
            elif not excl_path.is_dir():
                self.warning(f"Excluded path is not a directory: {excl_dir}")

    def create_params(self, args: argparse.Namespace) -> ClusteringParams:
        """Create ClusteringParams from CLI arguments."""
        try:
            return ClusteringParams(
                threshold=args.threshold,
                algorithm=ALGORITHM_ALIASES[args.algorithm],
                case_sensitive=args.case_sensitive,
                min_group_size=args.min_group_size,
                mode=MODE_ALIASES[args.mode],
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def collect_inputs(self, args: argparse.Namespace, params: ClusteringParams) -> List[str]:
        """Gather identifiers from arguments, list file, discovery and stdin."""
        try:
            return InputService.collect_files(
                cli_files=args.files,
                input_file=args.input_file,
                discover_dir=args.discover,
                full_paths=params.mode == ClusterMode.CONTENT,
                excluded_dirs=[str(Path(d).resolve()) for d in args.excluded_dirs],
            )
        except (ValueError, RuntimeError) as e:
            self.error_exit(str(e))

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def run_clustering(self, identifiers: List[str], params: ClusteringParams,
                       args: argparse.Namespace) -> ClusteringResult:
        """Execute clustering workflow."""
        hash_algorithm = HASH_ALIASES[args.hash]()
        command = ClusteringCommand(
            hash_algorithm=hash_algorithm,
            max_workers=args.workers
        )
        if self.verbose:
            if params.mode == ClusterMode.CONTENT:
                detail = f"hash: {hash_algorithm.name}"
            else:
                detail = f"algorithm: {params.algorithm.display_name}"
            print(f"Clustering {len(identifiers)} files (mode: {params.mode.value}, {detail})...",
                  file=sys.stderr)

        try:
            result, stats = command.execute(
                identifiers,
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except Exception as e:
            self.error_exit(f"Clustering failed: {e}")

        if self.verbose:
            sys.stderr.write("\n")
            print(stats.print_summary(), file=sys.stderr)

        for failure in result.failures:
            self.warning(f"Skipped unreadable file {failure.path}: {failure.reason}")

        return result

    def output_results(self, result: ClusteringResult, args: argparse.Namespace) -> None:
        """Write the result to stdout or to the --output file."""
        fmt = FORMAT_ALIASES[args.format]
        show_ungrouped = not args.hide_ungrouped

        if args.output:
            try:
                with open(args.output, 'w', encoding='utf-8', newline='') as f:
                    ReportService.write(result, f, fmt, show_ungrouped)
            except OSError as e:
                self.error_exit(f"Cannot write output file: {e}")
            if not self.quiet:
                print(f"Results written to: {args.output}", file=sys.stderr)
            return

        ReportService.write(result, sys.stdout, fmt, show_ungrouped)

    def execute_keep_one(self, groups: List[Group], force: bool = False) -> None:
        """Keep one file per group, delete the rest. Always shows preview before deletion."""
        if not groups:
            if not self.quiet:
                print("No groups found.")
            return

        files_to_delete, _ = GroupService.keep_only_one_file_per_group(groups)

        if not files_to_delete:
            if not self.quiet:
                print("No files to delete (all groups already have only one file).")
            return

        space_saved = GroupService.calculate_space_savings(groups, files_to_delete)
        space_saved_str = ConvertUtils.bytes_to_human(space_saved)

        # Always show deletion preview before action (safety first)
        print()
        for group in groups:
            tier = group.tier.value if group.tier is not None else "name"
            print(f"📁 Group {group.id} | Tier: {tier} | Files: {len(group.files)}")
            print("-" * 60)

            preserved_file = group.files[0]
            print(f"   [KEEP] {preserved_file.path}")
            self._print_file_details(preserved_file)

            for file in group.files[1:]:
                print(f"   [DEL]  {file.path}")
                self._print_file_details(file)
            print()

        print("=" * 60)
        print(f"Summary: Keep 1 file per group ({len(groups)} files preserved, "
              f"{len(files_to_delete)} files deleted)")
        print(f"Total space saved: {space_saved_str}")
        print()

        if force:
            print("⚠️  WARNING: --force flag skips confirmation. Proceeding with deletion...")
        else:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Lost interactive terminal during operation. "
                    "Use --force to proceed in non-interactive environments."
                )

            response = input(f"Are you sure you want to move {len(files_to_delete)} files to trash? [y/N]: ")
            if response.strip().lower() not in ("y", "yes"):
                print("Deletion cancelled by user.")
                return

        print(f"\nMoving {len(files_to_delete)} files to trash...")
        deleted_count, failed_files = FileService.move_multiple_to_trash(files_to_delete)
        for path, error in failed_files:
            self.warning(f"Failed to delete {path}: {error}")

        if failed_files:
            print(f"\n⚠️  Partial success: {deleted_count}/{len(files_to_delete)} files moved to trash.")
            print(f"Failed to delete {len(failed_files)} file(s):")
            for path, error in failed_files[:5]:  # Show first 5 errors
                print(f"  • {os.path.basename(path)}: {error.split(':')[-1].strip()}")
            if len(failed_files) > 5:
                print(f"  ...and {len(failed_files) - 5} more files")
        else:
            print(f"✅ Successfully moved {deleted_count} files to trash.")
            print(f"Total space saved: {space_saved_str}")

    @staticmethod
    def _print_file_details(file) -> None:
        details = []
        if file.size is not None:
            details.append(f"Size: {ConvertUtils.bytes_to_human(file.size)}")
        if file.last_modified is not None:
            details.append(f"Modified: {ConvertUtils.timestamp_to_human(file.last_modified)}")
        if details:
            print(f"          {' | '.join(details)}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet

        if self.verbose:
            logging.getLogger("filesim").setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)
        identifiers = self.collect_inputs(args, params)

        min_size = params.min_group_size if params.mode == ClusterMode.NAME else 2
        if len(identifiers) < min_size:
            self.warning(
                f"Only {len(identifiers)} files provided, but minimum group size is "
                f"{min_size}. No groups will be formed."
            )

        result = self.run_clustering(identifiers, params, args)

        if args.keep_one:
            # Always show preview before deletion (safety first)
            self.execute_keep_one(result.groups, force=args.force)
        else:
            self.output_results(result, args)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds", file=sys.stderr)


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
