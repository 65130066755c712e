"""Allow ``python -m docqa``."""

from .adapters.inbound.cli import app

app()
