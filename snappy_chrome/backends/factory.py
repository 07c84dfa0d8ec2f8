"""
Backend Factory
===============

Selects and builds the backend named in settings.
"""

from typing import Optional, Dict, Type

from snappy_chrome.backends.base import Backend
from snappy_chrome.backends.chrome_cli import ChromeCliBackend
from snappy_chrome.backends.playwright_backend import PlaywrightBackend
from snappy_chrome.config.logging import get_logger
from snappy_chrome.config.settings import get_settings

logger = get_logger(__name__)


class BackendFactory:
    """Factory for creating backends."""

    _backends: Dict[str, Type[Backend]] = {
        "chrome": ChromeCliBackend,
        "playwright": PlaywrightBackend,
    }

    @classmethod
    def available_backends(cls) -> list:
        """Names accepted by ``create_backend``."""
        return sorted(cls._backends)

    @classmethod
    def create_backend(cls, backend_type: Optional[str] = None) -> Backend:
        """
        Create backend instance.

        Args:
            backend_type: Backend name, the configured backend when omitted

        Returns:
            Backend instance
        """
        if backend_type is None:
            backend_type = get_settings().backend

        if backend_type not in cls._backends:
            logger.warning("Unknown backend, falling back to chrome", backend=backend_type)
            backend_type = "chrome"

        return cls._backends[backend_type]()
