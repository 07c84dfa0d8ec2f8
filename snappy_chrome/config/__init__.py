"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: Process-wide settings, default generation options and backend choice
- logging: Structured logging configuration
"""
