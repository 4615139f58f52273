"""
Tests for file service — critical for safe file deletion.
send2trash is patched so the tests never touch the real system trash.
"""
from unittest import mock

import pytest

from filesim.services.file_service import FileService


class TestMoveToTrash:
    """Test safe file deletion via system trash."""

    def test_sends_resolved_path_to_trash(self, tmp_path):
        test_file = tmp_path / "test.txt"
        test_file.write_text("content to delete")

        with mock.patch("filesim.services.file_service.send2trash") as mock_trash:
            FileService.move_to_trash(str(test_file))

        mock_trash.assert_called_once_with(str(test_file.resolve()))

    def test_raises_runtime_error_for_nonexistent_file(self, tmp_path):
        nonexistent = tmp_path / "does_not_exist.txt"

        with mock.patch("filesim.services.file_service.send2trash") as mock_trash:
            with pytest.raises(RuntimeError, match="File not found"):
                FileService.move_to_trash(str(nonexistent))
        mock_trash.assert_not_called()

    def test_wraps_trash_errors(self, tmp_path):
        test_file = tmp_path / "locked.txt"
        test_file.write_text("content")

        with mock.patch("filesim.services.file_service.send2trash", side_effect=OSError("denied")):
            with pytest.raises(RuntimeError, match="Failed to move to trash: denied"):
                FileService.move_to_trash(str(test_file))


class TestMoveMultipleToTrash:

    def test_continues_past_failures(self, tmp_path):
        good = tmp_path / "good.txt"
        good.write_text("x")
        missing = tmp_path / "missing.txt"

        with mock.patch("filesim.services.file_service.send2trash"):
            moved, errors = FileService.move_multiple_to_trash([str(missing), str(good)])

        assert moved == 1
        assert len(errors) == 1
        assert errors[0][0] == str(missing)
        assert "File not found" in errors[0][1]
