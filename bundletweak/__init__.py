"""Anchor-based customizer for minified single-file CLI bundles."""

__version__ = "1.0.0"
