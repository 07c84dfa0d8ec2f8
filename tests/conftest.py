"""
Test Configuration
==================

Pytest configuration with fixtures for settings, filesystem and generators.
No browser is started: backends are replaced by recording doubles.
"""

import os
import pytest
import structlog
import sys
from pathlib import Path
from typing import Generator

from snappy_chrome.config import settings as settings_module
from snappy_chrome.config.settings import Settings, reload_settings
from snappy_chrome.core.filesystem import Filesystem
from snappy_chrome.core.generator import ChromeGenerator
from snappy_chrome.core.outputs import PdfOutput, ScreenshotOutput

from tests.utils.mocks import RecordingBackend


@pytest.fixture(autouse=True)
def test_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[Settings, None, None]:
    """Fresh settings for every test, isolated from the caller's environment."""
    for name in list(os.environ):
        if name.upper().startswith("SNAPPY_CHROME_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("SNAPPY_CHROME_ENVIRONMENT", "testing")
    monkeypatch.setenv("SNAPPY_CHROME_REMOVE_TEMPORARY_FILES", "false")
    monkeypatch.setitem(Settings.model_config, "env_file", None)

    yield reload_settings()

    settings_module.settings = None


@pytest.fixture(autouse=True)
def stderr_logging() -> Generator[None, None, None]:
    """Send log output to stderr so that stdout carries only generated bytes."""
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(file=sys.stderr))
    yield
    structlog.reset_defaults()


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Directory for temporary generation files."""
    path = tmp_path / "snappy_tmp"
    path.mkdir()
    return path


@pytest.fixture
def filesystem(temp_dir: Path) -> Filesystem:
    """Filesystem writing temporary files into the test directory."""
    return Filesystem(temp_path=temp_dir, remove_on_exit=False)


@pytest.fixture
def recording_backend() -> RecordingBackend:
    """Backend double writing a fake PDF."""
    return RecordingBackend()


@pytest.fixture
def pdf_generator(recording_backend: RecordingBackend, filesystem: Filesystem) -> ChromeGenerator:
    """PDF generator with default options."""
    return ChromeGenerator(recording_backend, PdfOutput(), filesystem=filesystem)


@pytest.fixture
def screenshot_generator(filesystem: Filesystem) -> ChromeGenerator:
    """Screenshot generator writing fake PNG bytes."""
    backend = RecordingBackend(content=b"\x89PNG\r\n\x1a\nmock")
    return ChromeGenerator(backend, ScreenshotOutput(), filesystem=filesystem)


@pytest.fixture
def input_html(tmp_path: Path) -> Path:
    """HTML input file."""
    path = tmp_path / "input.html"
    path.write_text("<html><body><h1>Hello</h1></body></html>", encoding="utf-8")
    return path
