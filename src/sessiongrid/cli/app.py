"""
Root Typer application for the sessiongrid CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from sessiongrid.core.logging import configure_logging
from sessiongrid.core.settings import get_settings

app = Typer(
    name="sessiongrid",
    help="sessiongrid — container-backed browser session routing.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from sessiongrid import __version__

        typer.echo(f"sessiongrid {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", "-l", help="Override SESSIONGRID_LOG_LEVEL."
    ),
) -> None:
    """sessiongrid CLI — inspect docker session configuration."""
    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        json_format=settings.json_logs,
        service=settings.service_name,
    )


# ── Sub-command registration ─────────────────────────────────────────────

from sessiongrid.cli.docker import app as docker_app  # noqa: E402

app.add_typer(docker_app, name="docker", help="Docker session routing.")


if __name__ == "__main__":
    app()
