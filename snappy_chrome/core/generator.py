"""
Chrome Generator
================

Option bookkeeping and the four generation entry points shared by PDF and
screenshot generation. Rendering is delegated to a backend through the
output kind; output preparation and temporary files go through the
filesystem collaborator.

Instances are not thread safe: changing options while another thread is
generating with the same instance is undefined.
"""

from typing import Optional, Any, Union
import copy
import os
import time
from pathlib import Path
from urllib.parse import quote

from snappy_chrome.backends.base import Backend
from snappy_chrome.backends.factory import BackendFactory
from snappy_chrome.config.logging import get_logger
from snappy_chrome.config.settings import get_settings
from snappy_chrome.core.errors import GenerationError, InvalidOptionError
from snappy_chrome.core.filesystem import Filesystem
from snappy_chrome.core.outputs import OutputKind, PdfOutput, ScreenshotOutput
from snappy_chrome.models.schemas import GenerationRequest, InputKind, OptionSet

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]


def file_uri(input_path: PathLike) -> str:
    """Input URI of a file, the path is used as is."""
    return f"file://{os.fspath(input_path)}"


def html_data_uri(html: str) -> str:
    """Input URI embedding the HTML, percent-encoded per RFC 3986."""
    return f"data:text/html,{quote(html, safe='')}"


def _check_option_name(name: Any) -> None:
    if not isinstance(name, str) or not name:
        raise InvalidOptionError(f"Option names must be non-empty strings, got {name!r}")


class ChromeGenerator:
    """Generates PDF or screenshot files from HTML through a Chrome backend."""

    def __init__(
        self,
        backend: Backend,
        output: OutputKind,
        options: Optional[OptionSet] = None,
        filesystem: Optional[Filesystem] = None,
    ):
        """
        Args:
            backend: Chrome backend used to generate the output files
            output: Output kind (PDF or screenshot)
            options: Default options for every generation done with this instance.
                When omitted the configured defaults are used: disable-gpu,
                incognito, enable-viewport and window-size (1280x1696)
            filesystem: Filesystem collaborator, built from settings when omitted
        """
        if options is None:
            options = copy.deepcopy(get_settings().default_options)
        for name in options:
            _check_option_name(name)

        self._backend = backend
        self._output = output
        self._options: OptionSet = dict(options)
        self._filesystem = filesystem if filesystem is not None else Filesystem()
        self.logger: Any = logger.bind(
            component="chrome_generator", output_format=output.output_format.value
        )  # structlog.BoundLoggerBase

    @property
    def backend(self) -> Backend:
        return self._backend

    @property
    def output(self) -> OutputKind:
        return self._output

    @property
    def filesystem(self) -> Filesystem:
        return self._filesystem

    @property
    def options(self) -> OptionSet:
        """Deep copy of the default options of this instance."""
        return copy.deepcopy(self._options)

    def enable_option(self, name: str) -> None:
        _check_option_name(name)
        self._options[name] = True

    def remove_option(self, name: str) -> None:
        self._options.pop(name, None)

    def set_option(self, name: str, value: Any) -> None:
        """
        Set the default value for a specific option.

        Args:
            name: Option name
            value: Default value
        """
        _check_option_name(name)
        self._options[name] = value

    def set_options(self, options: OptionSet) -> None:
        """Set default values for some options, other options are kept."""
        for name in options:
            _check_option_name(name)
        self._options.update(options)

    def resolve_options(self, options: Optional[OptionSet] = None) -> OptionSet:
        """Default options overridden by the options of a single call."""
        resolved = dict(self._options)
        if options:
            for name in options:
                _check_option_name(name)
            resolved.update(options)
        return resolved

    def generate(
        self,
        input_path: PathLike,
        output_path: PathLike,
        options: Optional[OptionSet] = None,
        overwrite: bool = False,
    ) -> None:
        """
        Generate the output file from an input file.

        Raises:
            OutputExistsError: If the output exists and overwrite is disabled
            OutputNotWritableError: If the output location cannot be prepared
            InvalidOptionError: When the backend rejects an option
            GenerationError: When the backend fails to generate the output
        """
        output_path = os.fspath(output_path)
        request = self._build_request(InputKind.FILE, file_uri(input_path), output_path, options)
        self._filesystem.prepare_output(output_path, overwrite)
        self._run_and_discard_partial(request)

    def generate_from_html(
        self,
        html: str,
        output_path: PathLike,
        options: Optional[OptionSet] = None,
        overwrite: bool = False,
    ) -> None:
        """Generate the output file from HTML content, see ``generate``."""
        output_path = os.fspath(output_path)
        request = self._build_request(InputKind.HTML, html_data_uri(html), output_path, options)
        self._filesystem.prepare_output(output_path, overwrite)
        self._run_and_discard_partial(request)

    def get_output(self, input_path: PathLike, options: Optional[OptionSet] = None) -> bytes:
        """Generate from an input file and return the output bytes."""
        return self._get_output(InputKind.FILE, file_uri(input_path), options)

    def get_output_from_html(self, html: str, options: Optional[OptionSet] = None) -> bytes:
        """Generate from HTML content and return the output bytes."""
        return self._get_output(InputKind.HTML, html_data_uri(html), options)

    def _build_request(
        self,
        input_kind: InputKind,
        input_uri: str,
        output_path: str,
        options: Optional[OptionSet],
    ) -> GenerationRequest:
        return GenerationRequest(
            input_kind=input_kind,
            input_uri=input_uri,
            output_path=output_path,
            output_format=self._output.output_format,
            options=self.resolve_options(options),
        )

    def _get_output(
        self, input_kind: InputKind, input_uri: str, options: Optional[OptionSet]
    ) -> bytes:
        options = self.resolve_options(options)
        temporary_file = self._filesystem.create_temporary_file(
            extension=self._output.get_default_extension()
        )
        request = self._build_request(input_kind, input_uri, temporary_file, options)
        self._run(request)
        return self._filesystem.get_file_contents(temporary_file)

    def _run(self, request: GenerationRequest) -> None:
        log = self.logger.bind(**request.log_context())
        log.info("Generating output", option_count=len(request.options))

        started = time.monotonic()
        try:
            self._output.do_generate(
                self._backend, request.input_uri, request.output_path, dict(request.options)
            )
        except Exception as e:
            log.error("Generation failed", error=str(e), error_type=type(e).__name__)
            raise

        log.info(
            "Generation completed", duration_ms=round((time.monotonic() - started) * 1000, 2)
        )

    def _run_and_discard_partial(self, request: GenerationRequest) -> None:
        """Run a generation, deleting whatever a failed run left at the output path."""
        try:
            self._run(request)
        except GenerationError:
            partial = Path(request.output_path)
            if partial.is_file():
                partial.unlink()
                self.logger.warning("Removed partial output file", output_path=str(partial))
            raise


def create_pdf_generator(
    backend: Optional[Backend] = None,
    options: Optional[OptionSet] = None,
    filesystem: Optional[Filesystem] = None,
) -> ChromeGenerator:
    """Build a PDF generator, using the configured backend when none is given."""
    if backend is None:
        backend = BackendFactory.create_backend()
    return ChromeGenerator(backend, PdfOutput(), options, filesystem)


def create_screenshot_generator(
    backend: Optional[Backend] = None,
    options: Optional[OptionSet] = None,
    filesystem: Optional[Filesystem] = None,
) -> ChromeGenerator:
    """Build a screenshot generator, using the configured backend when none is given."""
    if backend is None:
        backend = BackendFactory.create_backend()
    return ChromeGenerator(backend, ScreenshotOutput(), options, filesystem)
