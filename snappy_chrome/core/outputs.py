"""
Output Kinds
============

PDF and screenshot capabilities plugged into a generator. Each one names its
default extension and tells the backend where to write through its output
option.
"""

from abc import ABC, abstractmethod

from snappy_chrome.backends.base import Backend, PDF_OUTPUT_OPTION, SCREENSHOT_OUTPUT_OPTION
from snappy_chrome.models.schemas import OptionSet, OutputFormat


class OutputKind(ABC):
    """Generation capability for one output format."""

    output_format: OutputFormat
    output_option: str

    def do_generate(
        self, backend: Backend, input_uri: str, output_path: str, options: OptionSet
    ) -> None:
        """
        Run the backend for this output format.

        Args:
            backend: Backend doing the rendering
            input_uri: URI of the input document
                (e.g "file://<filename>" or "data:text/html,<urlencoded-html>")
            output_path: Path of the output file
            options: Effective options of this generation

        Raises:
            InvalidOptionError: When an invalid option is used
            GenerationError: When the backend fails to generate the output file
        """
        backend.generate(input_uri, output_path, self.build_options(output_path, options))

    def build_options(self, output_path: str, options: OptionSet) -> OptionSet:
        """Options handed to the backend, with the output option pointing at ``output_path``."""
        effective = {
            name: value
            for name, value in options.items()
            if name not in (PDF_OUTPUT_OPTION, SCREENSHOT_OUTPUT_OPTION)
        }
        effective[self.output_option] = output_path
        return effective

    @abstractmethod
    def get_default_extension(self) -> str:
        """File extension, without the dot, used for temporary output files."""
        ...


class PdfOutput(OutputKind):
    """PDF output through Chrome's print to PDF."""

    output_format = OutputFormat.PDF
    output_option = PDF_OUTPUT_OPTION

    def get_default_extension(self) -> str:
        return "pdf"


class ScreenshotOutput(OutputKind):
    """PNG screenshot of the viewport."""

    output_format = OutputFormat.PNG
    output_option = SCREENSHOT_OUTPUT_OPTION

    def get_default_extension(self) -> str:
        return "png"
