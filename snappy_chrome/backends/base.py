"""
Backend Base
============

Abstract backend interface and the translation of option sets into Chrome
command line switches shared by every backend.
"""

from abc import ABC, abstractmethod
from typing import List
import re

from snappy_chrome.core.errors import InvalidOptionError
from snappy_chrome.models.schemas import OptionSet

# Options naming the output file; output kinds set exactly one of them.
PDF_OUTPUT_OPTION = "print-to-pdf"
SCREENSHOT_OUTPUT_OPTION = "screenshot"

_SWITCH_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


class Backend(ABC):
    """Drives the browser for a single generation."""

    @abstractmethod
    def generate(self, input_uri: str, output_path: str, options: OptionSet) -> None:
        """
        Render ``input_uri`` into ``output_path``.

        Raises:
            InvalidOptionError: When an option is rejected
            GenerationError: When the browser fails to produce the output file
        """
        ...


def _format_scalar(name: str, value: object) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise InvalidOptionError(f"Invalid value {value!r} for option '{name}'")
    return str(value)


def build_switches(options: OptionSet) -> List[str]:
    """
    Translate an option set into Chrome switches.

    ``True`` enables a bare switch, ``False`` and ``None`` leave it out,
    scalars become ``--name=value`` and sequences ``--name=a,b``.

    Raises:
        InvalidOptionError: For malformed names or unsupported values
    """
    switches: List[str] = []
    for name, value in options.items():
        if not isinstance(name, str) or not _SWITCH_NAME.match(name):
            raise InvalidOptionError(f"Invalid option name: {name!r}")

        if value is True:
            switches.append(f"--{name}")
        elif value is False or value is None:
            continue
        elif isinstance(value, (list, tuple)):
            if not value:
                raise InvalidOptionError(f"Empty value for option '{name}'")
            switches.append(f"--{name}=" + ",".join(_format_scalar(name, item) for item in value))
        else:
            switches.append(f"--{name}={_format_scalar(name, value)}")
    return switches


def output_target(options: OptionSet) -> str:
    """
    Return which output option is set.

    Raises:
        InvalidOptionError: Unless exactly one output option is present
    """
    targets = [
        name for name in (PDF_OUTPUT_OPTION, SCREENSHOT_OUTPUT_OPTION) if options.get(name)
    ]
    if len(targets) != 1:
        raise InvalidOptionError(
            f"Exactly one of '{PDF_OUTPUT_OPTION}' or '{SCREENSHOT_OUTPUT_OPTION}' must be set"
        )
    return targets[0]
