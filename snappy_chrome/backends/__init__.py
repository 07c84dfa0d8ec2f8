"""
Backends Module
===============

Browser backends producing the output files.

Components:
- base: Backend interface and option to switch translation
- chrome_cli: Headless Chrome run from the command line
- playwright_backend: Chromium driven through Playwright
- factory: Backend selection from settings
"""
