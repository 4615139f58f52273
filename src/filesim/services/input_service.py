"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/input_service.py
Collects the identifiers to cluster from every supported source:
positional arguments, a list file, directory discovery and standard input.
"""
import sys
from typing import List, Optional, TextIO

from filesim.core.scanner import FileScannerImpl


class InputService:

    @staticmethod
    def collect_files(
            cli_files: Optional[List[str]] = None,
            input_file: Optional[str] = None,
            discover_dir: Optional[str] = None,
            full_paths: bool = False,
            excluded_dirs: Optional[List[str]] = None,
            stdin: Optional[TextIO] = None,
    ) -> List[str]:
        """
        Gather identifiers from all sources, falling back to stdin when none yields anything.

        Args:
            cli_files: Names given directly on the command line
            input_file: Path of a file listing one name per line
            discover_dir: Directory to scan recursively
            full_paths: Report discovered files by full path instead of bare filename
            excluded_dirs: Directories skipped during discovery
            stdin: Stream read when no other source is given (defaults to sys.stdin)

        Returns:
            Sorted, de-duplicated, non-blank identifiers

        Raises:
            ValueError: If no identifiers were collected
            RuntimeError: If a list file or directory cannot be read
        """
        all_files: List[str] = list(cli_files or [])

        if input_file:
            all_files.extend(InputService.read_files_from_file(input_file))

        if discover_dir:
            all_files.extend(InputService.discover_files(discover_dir, full_paths, excluded_dirs))

        if not all_files:
            all_files.extend(InputService.read_files_from_stream(stdin or sys.stdin))

        files = sorted({f for f in all_files if f.strip()})
        if not files:
            raise ValueError("No files provided. Use --help for usage information.")
        return files

    @staticmethod
    def read_files_from_file(path: str) -> List[str]:
        """One name per line; blank lines and '#' comments are skipped."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                lines = f.readlines()
        except OSError as e:
            raise RuntimeError(f"Failed to read files from {path}: {e}") from e

        files = []
        for line in lines:
            trimmed = line.strip()
            if trimmed and not trimmed.startswith('#'):
                files.append(trimmed)
        return files

    @staticmethod
    def read_files_from_stream(stream: TextIO) -> List[str]:
        return [line.strip() for line in stream if line.strip()]

    @staticmethod
    def discover_files(
            directory: str,
            full_paths: bool = False,
            excluded_dirs: Optional[List[str]] = None
    ) -> List[str]:
        """Names (or full paths) of every file below directory."""
        scanner = FileScannerImpl(root_dir=directory, excluded_dirs=excluded_dirs)
        files = scanner.scan()
        if full_paths:
            return [f.path for f in files]
        return [f.name for f in files]
