"""
Chrome Command Line Backend
===========================

Runs headless Chrome once per generation, letting ``--print-to-pdf`` or
``--screenshot`` write the output file.
"""

from typing import Optional, List, Any
import shutil
import subprocess
import time
from pathlib import Path

from snappy_chrome.backends.base import Backend, build_switches, output_target
from snappy_chrome.config.logging import get_logger
from snappy_chrome.config.settings import get_settings
from snappy_chrome.core.errors import GenerationError
from snappy_chrome.models.schemas import OptionSet

logger = get_logger(__name__)

CHROME_CANDIDATES = (
    "google-chrome",
    "google-chrome-stable",
    "chromium",
    "chromium-browser",
    "chrome",
)

# Characters of stderr kept in error messages
STDERR_TAIL = 2000


class ChromeCliBackend(Backend):
    """Backend running the Chrome executable in headless mode."""

    def __init__(
        self,
        binary: Optional[str] = None,
        timeout: Optional[int] = None,
        headless_mode: Optional[str] = None,
    ):
        self.settings = get_settings()
        self.logger: Any = logger.bind(backend="chrome")  # structlog.BoundLoggerBase
        self.binary = binary or self.settings.chrome_binary
        self.timeout = timeout or self.settings.generation_timeout
        self.headless_mode = (
            headless_mode if headless_mode is not None else self.settings.headless_mode
        )

    def find_binary(self) -> str:
        """
        Locate the Chrome executable.

        Raises:
            GenerationError: If no executable can be found
        """
        if self.binary:
            return self.binary

        for candidate in CHROME_CANDIDATES:
            found = shutil.which(candidate)
            if found:
                self.binary = found
                return found

        raise GenerationError(
            "No Chrome executable found on PATH, set SNAPPY_CHROME_CHROME_BINARY"
        )

    def build_command(self, input_uri: str, options: OptionSet) -> List[str]:
        """Build the full command line for one generation."""
        output_target(options)

        command = [self.find_binary()]
        if "headless" not in options:
            command.append(f"--headless={self.headless_mode}" if self.headless_mode else "--headless")
        command.extend(build_switches(options))
        command.append(input_uri)
        return command

    def generate(self, input_uri: str, output_path: str, options: OptionSet) -> None:
        command = self.build_command(input_uri, options)
        self.logger.debug("Running Chrome", command=command[:-1], timeout=self.timeout)

        started = time.monotonic()
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError:
            raise GenerationError(f"Chrome executable '{command[0]}' not found")
        except OSError as e:
            raise GenerationError(f"Could not run Chrome executable '{command[0]}': {e}") from e
        except subprocess.TimeoutExpired:
            raise GenerationError(f"Chrome did not finish within {self.timeout} seconds")

        if completed.returncode != 0:
            stderr = (completed.stderr or "")[-STDERR_TAIL:]
            self.logger.error(
                "Chrome exited with an error", returncode=completed.returncode, stderr=stderr
            )
            raise GenerationError(
                f"Chrome exited with code {completed.returncode}: {stderr.strip()}"
            )

        output = Path(output_path)
        if not output.is_file() or output.stat().st_size == 0:
            raise GenerationError(f"Chrome did not produce the output file '{output_path}'")

        self.logger.debug(
            "Chrome finished",
            output_path=output_path,
            file_size=output.stat().st_size,
            duration_ms=round((time.monotonic() - started) * 1000, 2),
        )
