"""Allow ``python -m reclaim``."""

from reclaim.cli import app

app()
