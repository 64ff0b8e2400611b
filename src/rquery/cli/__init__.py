"""Command-line interface for querying XML files with selectors."""

from .main import main

__all__ = ["main"]
