"""HTTP interface for docqa."""

from .main import build_default_app, create_app

__all__ = ["build_default_app", "create_app"]
