"""
Snappy Chrome
=============

HTML to PDF and screenshot generation driven by a headless Chrome/Chromium.

This package provides:
- A generator that manages default options, output preparation and
  temporary files
- PDF and screenshot output kinds
- Backends running the Chrome command line or Playwright's Chromium
- A command line interface (``python -m snappy_chrome``)
"""

__version__ = "1.0.0"
__author__ = "Snappy Chrome Team"
