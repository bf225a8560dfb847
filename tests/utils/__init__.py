"""Shared test utilities for bundlegen tests."""
