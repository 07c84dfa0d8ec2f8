"""
Unit Tests for Filesystem
=========================

Output preparation and temporary file lifecycle.
"""

import gc
import os
import pytest
import weakref
from pathlib import Path
from unittest.mock import patch

from snappy_chrome.core.errors import (
    GenerationError,
    OutputExistsError,
    OutputNotWritableError,
    SnappyChromeError,
)
from snappy_chrome.core.filesystem import Filesystem


class TestPrepareOutput:
    """Test output preparation."""

    def test_missing_output_is_accepted(self, filesystem, tmp_path):
        """Test that a path with no existing file needs no preparation."""
        filesystem.prepare_output(tmp_path / "out.pdf")

    def test_parent_directories_created(self, filesystem, tmp_path):
        """Test that missing parent directories are created."""
        output = tmp_path / "a" / "b" / "out.pdf"

        filesystem.prepare_output(output)

        assert output.parent.is_dir()
        assert not output.exists()

    def test_existing_output_rejected(self, filesystem, tmp_path):
        """Test that an existing output is kept and reported without overwrite."""
        output = tmp_path / "out.pdf"
        output.write_bytes(b"data")

        with pytest.raises(OutputExistsError, match="already exists"):
            filesystem.prepare_output(output)

        assert output.exists()

    def test_existing_output_removed_with_overwrite(self, filesystem, tmp_path):
        """Test that overwrite deletes the existing output."""
        output = tmp_path / "out.pdf"
        output.write_bytes(b"data")

        filesystem.prepare_output(str(output), overwrite=True)

        assert not output.exists()

    def test_directory_output_rejected(self, filesystem, tmp_path):
        """Test that a directory is never used as output."""
        output = tmp_path / "out.pdf"
        output.mkdir()

        with pytest.raises(OutputNotWritableError, match="is a directory"):
            filesystem.prepare_output(output, overwrite=True)

    def test_unremovable_output(self, filesystem, tmp_path):
        """Test deletion failures during overwrite."""
        output = tmp_path / "out.pdf"
        output.write_bytes(b"data")

        with patch.object(Path, "unlink", side_effect=PermissionError("denied")):
            with pytest.raises(OutputNotWritableError, match="Could not delete"):
                filesystem.prepare_output(output, overwrite=True)

    def test_uncreatable_directory(self, filesystem, tmp_path):
        """Test a parent path blocked by a regular file."""
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(OutputNotWritableError, match="Unable to create"):
            filesystem.prepare_output(blocker / "out.pdf")

    def test_unwritable_directory(self, filesystem, tmp_path):
        """Test a parent directory without write access."""
        with patch("snappy_chrome.core.filesystem.os.access", return_value=False):
            with pytest.raises(OutputNotWritableError, match="not writable"):
                filesystem.prepare_output(tmp_path / "out.pdf")

    def test_errors_share_base_class(self):
        """Test the output error hierarchy."""
        assert issubclass(OutputExistsError, SnappyChromeError)
        assert issubclass(OutputNotWritableError, PermissionError)


class TestTemporaryFiles:
    """Test temporary file handling."""

    def test_create_temporary_file(self, filesystem, temp_dir):
        """Test temporary file naming and tracking."""
        path = filesystem.create_temporary_file(extension="pdf")

        assert Path(path).parent == temp_dir
        assert Path(path).name.startswith("snappy_chrome_")
        assert path.endswith(".pdf")
        assert Path(path).read_bytes() == b""
        assert filesystem.temporary_files == [path]

    def test_temporary_files_are_unique(self, filesystem):
        """Test that every call creates a new file."""
        paths = {filesystem.create_temporary_file(extension="png") for _ in range(5)}
        assert len(paths) == 5

    def test_create_temporary_file_with_content(self, filesystem):
        """Test text and bytes content written to temporary files."""
        text_path = filesystem.create_temporary_file(prefix="page", extension="html", content="<p>é</p>")
        bytes_path = filesystem.create_temporary_file(content=b"\x00\x01")

        assert Path(text_path).name.startswith("page_")
        assert Path(text_path).read_text(encoding="utf-8") == "<p>é</p>"
        assert Path(bytes_path).read_bytes() == b"\x00\x01"
        assert Path(bytes_path).suffix == ""

    def test_get_file_contents(self, filesystem, tmp_path):
        """Test reading a generated file."""
        path = tmp_path / "data.bin"
        path.write_bytes(b"content")

        assert filesystem.get_file_contents(path) == b"content"

    def test_get_file_contents_missing(self, filesystem, tmp_path):
        """Test reading a file that was never generated."""
        with pytest.raises(GenerationError, match="was not created"):
            filesystem.get_file_contents(tmp_path / "missing.pdf")

    def test_remove_temporary_files(self, filesystem):
        """Test cleanup, including files already deleted elsewhere."""
        first = filesystem.create_temporary_file(extension="pdf")
        second = filesystem.create_temporary_file(extension="pdf")
        os.unlink(second)

        filesystem.remove_temporary_files()

        assert not Path(first).exists()
        assert filesystem.temporary_files == []

    def test_remove_temporary_files_twice(self, filesystem):
        """Test that files created after a cleanup are tracked again."""
        filesystem.create_temporary_file(extension="pdf")
        filesystem.remove_temporary_files()
        path = filesystem.create_temporary_file(extension="pdf")

        assert filesystem.temporary_files == [path]
        filesystem.remove_temporary_files()
        assert not Path(path).exists()

    def test_temp_path_from_settings(self, monkeypatch, tmp_path):
        """Test temporary directory and prefix read from settings."""
        from snappy_chrome.config.settings import reload_settings

        configured = tmp_path / "configured"
        monkeypatch.setenv("SNAPPY_CHROME_TEMP_PATH", str(configured))
        monkeypatch.setenv("SNAPPY_CHROME_TEMP_PREFIX", "custom")
        reload_settings()

        filesystem = Filesystem()
        path = filesystem.create_temporary_file(extension="png")

        assert Path(path).parent == configured
        assert Path(path).name.startswith("custom_")


class TestAutomaticCleanup:
    """Test cleanup on collection and at interpreter exit."""

    def test_remove_on_exit_registers_cleanup(self, temp_dir):
        """Test that a finalizer is attached when cleanup is enabled."""
        filesystem = Filesystem(temp_path=temp_dir, remove_on_exit=True)

        assert filesystem._finalizer.alive
        assert filesystem._finalizer.atexit

        filesystem._finalizer.detach()

    def test_remove_on_exit_follows_settings(self, temp_dir):
        """Test that no finalizer is attached when settings disable cleanup."""
        filesystem = Filesystem(temp_path=temp_dir)

        assert filesystem._finalizer is None

    def test_finalizer_does_not_keep_instance_alive(self, temp_dir):
        """Test that an enabled instance can still be garbage collected."""
        filesystem = Filesystem(temp_path=temp_dir, remove_on_exit=True)
        reference = weakref.ref(filesystem)

        del filesystem
        gc.collect()

        assert reference() is None

    def test_dropped_instance_removes_temporary_files(self, temp_dir):
        """Test that collecting an instance removes its temporary files."""
        filesystem = Filesystem(temp_path=temp_dir, remove_on_exit=True)
        first = filesystem.create_temporary_file(extension="pdf")
        second = filesystem.create_temporary_file(extension="png")

        del filesystem
        gc.collect()

        assert not Path(first).exists()
        assert not Path(second).exists()

    def test_explicit_cleanup_before_collection(self, temp_dir):
        """Test that explicit cleanup and the finalizer can both run."""
        filesystem = Filesystem(temp_path=temp_dir, remove_on_exit=True)
        path = filesystem.create_temporary_file(extension="pdf")

        filesystem.remove_temporary_files()
        filesystem._finalizer()

        assert not Path(path).exists()
        assert not filesystem._finalizer.alive
