"""
Shared fixtures for clustering tests.
Creates isolated temporary directories with controlled test files.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for content-mode scenarios:
    - 2 byte-identical files with unrelated names (identical tier)
    - 2 same-size files with near-identical names (content tier)
    - 1 unrelated file
    - 1 empty file (still a valid input)
    """
    files = {}

    content_a = b"A" * 1024
    files["photo"] = temp_dir / "holiday.jpg"
    files["photo_copy"] = temp_dir / "zz_backup.jpg"
    files["photo"].write_bytes(content_a)
    files["photo_copy"].write_bytes(content_a)

    files["report"] = temp_dir / "quarterly_report_final.pdf"
    files["report2"] = temp_dir / "quarterly_report_final2.pdf"
    files["report"].write_bytes(b"B" * 2048)
    files["report2"].write_bytes(b"C" * 2048)

    files["unique"] = temp_dir / "notes.txt"
    files["unique"].write_bytes(b"D" * 1500)

    files["empty"] = temp_dir / "empty.dat"
    files["empty"].write_bytes(b"")

    return files
