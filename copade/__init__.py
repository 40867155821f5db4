"""COPADE invoice field extraction and manual correction."""

__version__ = "0.1.0"
