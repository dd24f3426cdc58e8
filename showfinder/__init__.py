"""Async TVmaze show search and episode listing."""

__version__ = "0.1.0"
