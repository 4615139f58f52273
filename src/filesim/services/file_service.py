"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Safe file removal: files are moved to the system trash, never erased.
"""
from pathlib import Path
from typing import List, Tuple
from send2trash import send2trash


class FileService:

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise RuntimeError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e

    @classmethod
    def move_multiple_to_trash(cls, file_paths: List[str]) -> Tuple[int, List[Tuple[str, str]]]:
        """
        Moves every file to trash, continuing past individual failures.
        Returns the number of files moved and (path, error) for each failure.
        """
        moved = 0
        errors = []
        for path in file_paths:
            try:
                cls.move_to_trash(path)
                moved += 1
            except RuntimeError as e:
                errors.append((path, str(e)))
        return moved, errors
