"""
Core Module
===========

Generation logic independent of the browser backend in use.

Components:
- errors: Exception hierarchy
- filesystem: Output preparation and temporary file handling
- generator: Option bookkeeping and generation entry points
- outputs: PDF and screenshot output kinds
"""
