"""Polyglot - runtime localization with locale fallback chains."""

__version__ = "0.1.0"
