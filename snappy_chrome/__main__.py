"""
Command Line Interface
======================

Render a file or HTML content to PDF or PNG from the shell.

    snappy-chrome pdf page.html page.pdf
    snappy-chrome screenshot --html - shot.png < page.html
    snappy-chrome pdf page.html - --option window-size=800,600 > page.pdf
"""

import argparse
import sys
from pathlib import Path
from typing import Any, List, Optional, Tuple

from snappy_chrome import __version__
from snappy_chrome.backends.factory import BackendFactory
from snappy_chrome.config.logging import setup_logging
from snappy_chrome.core.errors import SnappyChromeError
from snappy_chrome.core.generator import create_pdf_generator, create_screenshot_generator


def parse_option_value(raw: str) -> Any:
    """Convert a command line option value to bool, int, list of ints or str."""
    lowered = raw.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"

    parts = [part.strip() for part in raw.split(",")]
    if all(part.lstrip("-").isdigit() for part in parts):
        numbers = [int(part) for part in parts]
        return numbers if len(numbers) > 1 else numbers[0]
    return raw


def parse_option(raw: str) -> Tuple[str, Any]:
    """Parse ``NAME=VALUE`` (or a bare ``NAME``, meaning enabled)."""
    name, separator, value = raw.partition("=")
    if not name:
        raise argparse.ArgumentTypeError(f"invalid option '{raw}', expected NAME=VALUE")
    return name, parse_option_value(value) if separator else True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snappy-chrome", description="Render HTML to PDF or PNG with headless Chrome"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("kind", choices=["pdf", "screenshot"], help="Output kind")
    parser.add_argument("input", help="Input file, or '-' with --html to read stdin")
    parser.add_argument("output", help="Output file, or '-' to write to stdout")
    parser.add_argument(
        "--html", action="store_true", help="Render the input content as inline HTML"
    )
    parser.add_argument("--overwrite", action="store_true", help="Replace an existing output")
    parser.add_argument(
        "--option", "-o", dest="options", action="append", type=parse_option, default=[],
        metavar="NAME=VALUE", help="Set an option (repeatable)",
    )
    parser.add_argument(
        "--enable", action="append", default=[], metavar="NAME", help="Enable an option"
    )
    parser.add_argument(
        "--remove", action="append", default=[], metavar="NAME",
        help="Remove a default option",
    )
    parser.add_argument(
        "--backend", choices=BackendFactory.available_backends(),
        help="Backend, the configured one when omitted",
    )
    return parser


def _read_html(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line interface."""
    args = build_parser().parse_args(argv)
    setup_logging()

    backend = BackendFactory.create_backend(args.backend)
    factory = create_pdf_generator if args.kind == "pdf" else create_screenshot_generator
    generator = factory(backend)

    try:
        for name in args.remove:
            generator.remove_option(name)
        for name in args.enable:
            generator.enable_option(name)
        generator.set_options(dict(args.options))

        if args.output == "-":
            if args.html:
                data = generator.get_output_from_html(_read_html(args.input))
            else:
                data = generator.get_output(Path(args.input).resolve())
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()
        elif args.html:
            generator.generate_from_html(
                _read_html(args.input), args.output, overwrite=args.overwrite
            )
        else:
            generator.generate(Path(args.input).resolve(), args.output, overwrite=args.overwrite)
    except (SnappyChromeError, OSError) as e:
        print(f"snappy-chrome: {e}", file=sys.stderr)
        return 1
    finally:
        generator.filesystem.remove_temporary_files()

    return 0


if __name__ == "__main__":
    sys.exit(main())
