"""Command-line interface for docqa."""

from .commands import app

__all__ = ["app"]
