"""
Playwright Backend
==================

Generation through Playwright's bundled Chromium. Output options select
``page.pdf`` or ``page.screenshot``, ``window-size`` becomes the viewport and
remaining options are passed as launch arguments.
"""

from typing import Optional, Dict, Any, Tuple

from playwright.sync_api import sync_playwright, Error as PlaywrightError

from snappy_chrome.backends.base import (
    Backend,
    PDF_OUTPUT_OPTION,
    SCREENSHOT_OUTPUT_OPTION,
    build_switches,
    output_target,
)
from snappy_chrome.config.logging import get_logger
from snappy_chrome.config.settings import get_settings
from snappy_chrome.core.errors import GenerationError, InvalidOptionError
from snappy_chrome.models.schemas import OptionSet

logger = get_logger(__name__)


def parse_window_size(value: Any) -> Tuple[int, int]:
    """
    Parse a ``window-size`` value given as a pair or as ``"W,H"``.

    Raises:
        InvalidOptionError: Unless the value holds two positive integers
    """
    parts = value.split(",") if isinstance(value, str) else value
    try:
        width, height = (int(part) for part in parts)
    except (TypeError, ValueError):
        raise InvalidOptionError(f"Invalid value {value!r} for option 'window-size'")
    if width <= 0 or height <= 0:
        raise InvalidOptionError(f"Invalid value {value!r} for option 'window-size'")
    return width, height


class PlaywrightBackend(Backend):
    """Backend driving Chromium through the synchronous Playwright API."""

    def __init__(self, headless: Optional[bool] = None, timeout: Optional[int] = None):
        self.settings = get_settings()
        self.logger: Any = logger.bind(backend="playwright")  # structlog.BoundLoggerBase
        self.headless = True if headless is None else headless
        self.timeout = timeout or self.settings.generation_timeout

    def _split_options(self, options: OptionSet) -> Tuple[str, Dict[str, Any], Dict[str, Any]]:
        """Separate output and page options from launch arguments."""
        target = output_target(options)
        remaining = dict(options)
        remaining.pop(PDF_OUTPUT_OPTION, None)
        remaining.pop(SCREENSHOT_OUTPUT_OPTION, None)
        # Browser contexts are always isolated
        remaining.pop("incognito", None)

        launch: Dict[str, Any] = {"headless": bool(remaining.pop("headless", self.headless))}
        context: Dict[str, Any] = {}
        if remaining.get("window-size") is not None:
            width, height = parse_window_size(remaining["window-size"])
            context["viewport"] = {"width": width, "height": height}

        launch["args"] = build_switches(remaining)
        launch["timeout"] = self.timeout * 1000
        return target, launch, context

    def generate(self, input_uri: str, output_path: str, options: OptionSet) -> None:
        target, launch_options, context_options = self._split_options(options)
        timeout_ms = self.timeout * 1000

        try:
            with sync_playwright() as playwright:
                browser = playwright.chromium.launch(**launch_options)
                try:
                    context = browser.new_context(**context_options)
                    page = context.new_page()
                    page.set_default_timeout(timeout_ms)
                    page.goto(input_uri, wait_until="load")

                    if target == PDF_OUTPUT_OPTION:
                        page.pdf(path=output_path)
                    else:
                        page.screenshot(path=output_path, type="png")
                finally:
                    browser.close()
        except PlaywrightError as e:
            error_msg = f"Playwright generation failed: {e}"
            self.logger.error("Playwright generation error", error=error_msg)
            raise GenerationError(error_msg)

        self.logger.debug("Playwright generation completed", output_path=output_path, target=target)
