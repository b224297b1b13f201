"""Allow ``python -m sessiongrid``."""

from sessiongrid.cli.app import app

app()
