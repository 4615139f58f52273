"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Recursive file discovery for the clustering input.
Features:
- Uses pathlib.Path for robust, cross-platform path handling
- Walks the whole tree with os.walk
- Skips symbolic links, system trash folders and excluded directories
- Returns a List of File objects carrying size and modification time
"""

import os
import sys
from typing import List, Optional, Callable
from pathlib import Path
import time
import logging

from filesim.core.models import File
from filesim.core.interfaces import FileScanner

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Scans directories recursively.

    Attributes:
        root_dir: Root directory to scan
        excluded_dirs: Directories whose contents are never reported
    """

    PROGRESS_INTERVAL = 5000  # Update every 5,000 files

    def __init__(self, root_dir: str, excluded_dirs: Optional[List[str]] = None):
        self.root_dir = root_dir
        self.excluded_dirs = [str(Path(d).resolve()) for d in excluded_dirs] if excluded_dirs else []

    def scan(self,
             progress_callback: Optional[Callable[[str, int, object], None]] = None) -> List[File]:
        """
        Single-pass scan with throttled progress updates.
        Returns every regular file found in the directory tree, in walk order.

        Raises:
            RuntimeError: if the root does not exist or is not a directory
        """
        logger.debug(f"Scanning directory: {self.root_dir}")

        root_path = Path(self.root_dir)
        if not root_path.exists():
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)
        if not root_path.is_dir():
            error_msg = f"Path is not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        found_files = []
        processed_files = 0
        progress_counter = 0
        start_time = time.time()

        for root, dirs, files in os.walk(str(root_path)):
            # Pre-filter subdirectories BEFORE os.walk enters them
            dirs[:] = sorted(d for d in dirs if self._prefilter_dirs(Path(root) / d))

            for filename in sorted(files):
                file_info = self._process_file(Path(root) / filename)
                if file_info:
                    found_files.append(file_info)
                processed_files += 1
                progress_counter += 1

                if progress_callback and progress_counter >= self.PROGRESS_INTERVAL:
                    progress_callback('Scanning', processed_files, None)
                    progress_counter = 0

        # Final update for small datasets
        if progress_callback and progress_counter > 0:
            progress_callback('Scanning', processed_files, None)

        logger.debug(f"Scan completed in {time.time() - start_time:.2f} seconds. "
                     f"Found {len(found_files)} files.")
        return found_files

    @staticmethod
    def _is_system_trash(path: Path) -> bool:
        """
        Check if path belongs to OS trash/recycle bin (cross-platform).
        Returns False on any error (fail-safe: better to scan than skip valid data).
        """
        try:
            path_str = str(path.resolve(strict=False))

            if sys.platform == "win32":
                return "$Recycle.Bin" in path_str or "\\Recycler\\" in path_str
            elif sys.platform == "darwin":
                return "/.Trash/" in path_str or path_str.endswith("/.Trash")
            else:
                # Linux/BSD: freedesktop.org standard locations
                return ".local/share/Trash" in path_str or "/.trash/" in path_str
        except (OSError, ValueError):
            return False

    @staticmethod
    def _is_excluded_directory(path: Path, excluded_dirs: List[str]) -> bool:
        """Check if path is within an excluded directory."""
        try:
            path_str = str(path.resolve(strict=False))
            for excluded_dir in excluded_dirs:
                normalized_excluded = os.path.normpath(excluded_dir)
                if path_str.startswith(normalized_excluded + os.sep) or \
                        path_str == normalized_excluded:
                    return True
            return False
        except (OSError, ValueError):
            return False

    def _prefilter_dirs(self, path: Path) -> bool:
        """Pre-filter directories: skip system trash, excluded and inaccessible locations."""
        if FileScannerImpl._is_system_trash(path):
            logger.debug(f"Skipping system trash directory: {path}")
            return False

        if self.excluded_dirs and self._is_excluded_directory(path, self.excluded_dirs):
            logger.debug(f"Skipping excluded directory: {path}")
            return False

        try:
            return path.is_dir() and os.access(path, os.R_OK | os.X_OK)
        except OSError:
            logger.debug(f"Skipping inaccessible directory: {path}")
            return False

    @staticmethod
    def _process_file(path: Path) -> Optional[File]:
        """
        Build a File for a regular, non-symlink path.
        Returns None (and logs at DEBUG) when the path cannot be used.
        """
        try:
            if path.is_symlink():
                logger.debug(f"Skipping symbolic link: {path}")
                return None
            stat_result = path.stat()
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return None

        return File(
            path=str(path),
            size=stat_result.st_size,
            last_modified=int(stat_result.st_mtime),
        )
