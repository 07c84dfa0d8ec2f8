"""
Data Models
===========

Pydantic data models for generation requests and option sets.

Models:
- schemas: Option set aliases, output formats and generation requests
"""
