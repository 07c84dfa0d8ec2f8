"""
Test Suite
==========

Unit tests for generators, backends, filesystem handling and configuration.
"""
