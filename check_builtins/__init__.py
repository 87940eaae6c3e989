"""Audit how bash resolves command names."""

__version__ = "1.3.0"
