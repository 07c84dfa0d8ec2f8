"""
Filesystem
==========

Output preparation and temporary file management used by generators.
Temporary files stay on disk until ``remove_temporary_files`` runs. Unless
disabled, this also happens when the instance is garbage collected or at
interpreter exit, whichever comes first.
"""

from typing import Optional, Union, List, Any
import os
import tempfile
import weakref
from pathlib import Path

from snappy_chrome.config.logging import get_logger
from snappy_chrome.config.settings import get_settings
from snappy_chrome.core.errors import (
    GenerationError,
    OutputExistsError,
    OutputNotWritableError,
)

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]


def _remove_files(filenames: List[str]) -> None:
    """Unlink the given files and empty the list in place."""
    for filename in filenames:
        try:
            Path(filename).unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove temporary file", path=filename, error=str(e))
    if filenames:
        logger.debug("Temporary files removed", count=len(filenames))
    filenames.clear()


class Filesystem:
    """Filesystem collaborator for output files and temporary files."""

    def __init__(
        self,
        temp_path: Optional[PathLike] = None,
        prefix: Optional[str] = None,
        remove_on_exit: Optional[bool] = None,
    ):
        self.settings = get_settings()
        self.logger: Any = logger.bind(component="filesystem")  # structlog.BoundLoggerBase

        temp_path = temp_path if temp_path is not None else self.settings.temp_path
        self.temp_path = Path(temp_path) if temp_path is not None else Path(tempfile.gettempdir())
        self.prefix = prefix if prefix is not None else self.settings.temp_prefix
        self._temporary_files: List[str] = []

        if remove_on_exit is None:
            remove_on_exit = self.settings.remove_temporary_files
        # Runs on collection or at exit; holds the file list, not the instance
        self._finalizer: Optional[weakref.finalize] = None
        if remove_on_exit:
            self._finalizer = weakref.finalize(self, _remove_files, self._temporary_files)

    @property
    def temporary_files(self) -> List[str]:
        """Paths of the temporary files created so far."""
        return list(self._temporary_files)

    def prepare_output(self, path: PathLike, overwrite: bool = False) -> None:
        """
        Make sure the output file can be written.

        Args:
            path: Output file path
            overwrite: Remove an existing file instead of failing

        Raises:
            OutputExistsError: If the file exists and overwrite is disabled
            OutputNotWritableError: If the file or its directory cannot be prepared
        """
        output = Path(path)

        if output.exists():
            if not overwrite:
                raise OutputExistsError(f"The output file '{output}' already exists.")
            if output.is_dir():
                raise OutputNotWritableError(f"The output file '{output}' is a directory.")
            try:
                output.unlink()
            except OSError as e:
                raise OutputNotWritableError(
                    f"Could not delete already existing output file '{output}': {e}"
                )
            self.logger.debug("Removed existing output file", path=str(output))

        directory = output.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputNotWritableError(f"Unable to create the directory '{directory}': {e}")

        if not os.access(directory, os.W_OK):
            raise OutputNotWritableError(f"The output directory '{directory}' is not writable.")

    def create_temporary_file(
        self,
        prefix: Optional[str] = None,
        extension: Optional[str] = None,
        content: Optional[Union[str, bytes]] = None,
    ) -> str:
        """
        Create a uniquely named temporary file.

        Args:
            prefix: File name prefix, the configured prefix when omitted
            extension: File extension without the leading dot
            content: Optional content written to the file

        Returns:
            Path of the created file
        """
        self.temp_path.mkdir(parents=True, exist_ok=True)
        suffix = f".{extension}" if extension else ""
        fd, filename = tempfile.mkstemp(
            suffix=suffix, prefix=f"{prefix or self.prefix}_", dir=str(self.temp_path)
        )
        with os.fdopen(fd, "wb") as handle:
            if content is not None:
                handle.write(content.encode("utf-8") if isinstance(content, str) else content)

        self._temporary_files.append(filename)
        self.logger.debug("Temporary file created", path=filename)
        return filename

    def get_file_contents(self, path: PathLike) -> bytes:
        """
        Read a whole file back into memory.

        Raises:
            GenerationError: If the file does not exist
        """
        try:
            return Path(path).read_bytes()
        except FileNotFoundError:
            raise GenerationError(f"The file '{path}' was not created.")

    def remove_temporary_files(self) -> None:
        """Remove every temporary file created by this instance."""
        _remove_files(self._temporary_files)
