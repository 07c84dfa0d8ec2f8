"""
Errors
======

Exceptions raised by generators, backends and the filesystem collaborator.
Each one also derives from the closest builtin so callers can catch either.
"""


class SnappyChromeError(Exception):
    """Base exception for all generation errors."""

    pass


class InvalidOptionError(SnappyChromeError, ValueError):
    """Exception raised when an option name or value is rejected."""

    pass


class GenerationError(SnappyChromeError, RuntimeError):
    """Exception raised when the backend fails to produce the output file."""

    pass


class OutputExistsError(SnappyChromeError, FileExistsError):
    """Exception raised when the output file exists and overwriting is disabled."""

    pass


class OutputNotWritableError(SnappyChromeError, PermissionError):
    """Exception raised when the output location cannot be prepared."""

    pass
