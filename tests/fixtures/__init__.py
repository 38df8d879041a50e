"""Shared offline fixtures for the test-suite."""
