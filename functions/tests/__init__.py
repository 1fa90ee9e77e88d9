"""
Test Suite for the Scale Comparison Functions

This package contains tests organized by category:
- unit/: Unit tests for individual modules
- integration/: Engine and HTTP function tests against real and in-memory catalogs
- conftest.py: Shared pytest fixtures and configuration
"""
