"""Utility functions and helpers."""

from .logging import JSONFormatter, TextFormatter, setup_logging

__all__ = ["JSONFormatter", "TextFormatter", "setup_logging"]
