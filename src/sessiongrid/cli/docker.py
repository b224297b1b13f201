"""
CLI: ``sessiongrid docker`` — inspect docker session configuration.

Usage::

    sessiongrid docker endpoint                         # resolved daemon URI
    sessiongrid docker probe --host tcp://build:2375    # is the daemon usable?
    sessiongrid docker routes \\
        -c selenium/standalone-firefox -c '{"browserName": "firefox"}'

Options left unset fall back to ``SESSIONGRID_DOCKER_*`` environment
variables (``configs`` as a JSON array).
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from sessiongrid.core.config import CompoundConfig, Config, EnvConfig, MapConfig
from sessiongrid.core.errors import GridError
from sessiongrid.docker.client import DefaultHttpClientFactory, DockerClient
from sessiongrid.docker.factories import SessionRoutes
from sessiongrid.docker.options import DockerOptions
from sessiongrid.docker.section import DOCKER_SECTION

app = typer.Typer(no_args_is_help=True)
console = Console()
err_console = Console(stderr=True)


def build_config(
    url: str | None = None,
    host: str | None = None,
    configs: list[str] | None = None,
    video_image: str | None = None,
    assets_path: str | None = None,
) -> Config:
    """Command-line values first, then the environment."""
    flags = {
        "url": url,
        "host": host,
        "configs": configs or None,
        "video-image": video_image,
        "assets-path": assets_path,
    }
    section = {option: value for option, value in flags.items() if value is not None}
    return CompoundConfig(MapConfig({DOCKER_SECTION: section}), EnvConfig())


def _options(config: Config) -> DockerOptions:
    return DockerOptions(config, driver_factory=DockerClient)


def _fail(error: GridError) -> NoReturn:
    err_console.print(f"[red]{error.__class__.__name__}:[/] {error.message}")
    if error.cause is not None:
        err_console.print(f"  caused by: {error.cause}")
    raise typer.Exit(code=1)


def summarize_routes(routes: SessionRoutes) -> list[dict[str, Any]]:
    """One row per (stereotype, image) with its slot count."""
    rows: list[dict[str, Any]] = []
    for stereotype, slots in routes.items():
        per_image: dict[str, dict[str, Any]] = {}
        for slot in slots:
            row = per_image.setdefault(
                slot.image.name,
                {
                    "stereotype": stereotype.to_dict(),
                    "image": slot.image.name,
                    "slots": 0,
                    "video_image": slot.video_image.name if slot.video_image else None,
                },
            )
            row["slots"] += 1
        rows.extend(per_image.values())
    return rows


# ── Commands ─────────────────────────────────────────────────────────────


@app.command("endpoint")
def show_endpoint(
    url: str | None = typer.Option(None, "--url", help="Explicit daemon URL."),
    host: str | None = typer.Option(None, "--host", help="Daemon host, e.g. tcp://host:2375."),
) -> None:
    """Print the docker daemon endpoint that would be used."""
    try:
        typer.echo(_options(build_config(url=url, host=host)).docker_uri())
    except GridError as e:
        _fail(e)


@app.command("probe")
def probe(
    url: str | None = typer.Option(None, "--url", help="Explicit daemon URL."),
    host: str | None = typer.Option(None, "--host", help="Daemon host, e.g. tcp://host:2375."),
    config: list[str] = typer.Option(
        [], "--config", "-c", help="Image name / JSON stereotype, alternating. Repeatable.",
    ),
) -> None:
    """Check whether docker-backed sessions would be offered.

    Exits with code 1 when they would not.
    """
    options = _options(build_config(url=url, host=host, configs=config))
    try:
        enabled = options.is_enabled(DefaultHttpClientFactory())
        docker_uri = options.docker_uri()
    except GridError as e:
        _fail(e)

    if enabled:
        console.print(f"[green]available[/] {docker_uri}")
        return
    console.print(f"[yellow]unavailable[/] {docker_uri}")
    raise typer.Exit(code=1)


@app.command("routes")
def routes(
    url: str | None = typer.Option(None, "--url", help="Explicit daemon URL."),
    host: str | None = typer.Option(None, "--host", help="Daemon host, e.g. tcp://host:2375."),
    config: list[str] = typer.Option(
        [], "--config", "-c", help="Image name / JSON stereotype, alternating. Repeatable.",
    ),
    video_image: str | None = typer.Option(None, "--video-image", help="Recording sidecar image."),
    assets_path: str | None = typer.Option(None, "--assets-path", help="Where recordings are stored."),
    json_out: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """Warm images and print the stereotype routing table."""
    options = _options(
        build_config(
            url=url,
            host=host,
            configs=config,
            video_image=video_image,
            assets_path=assets_path,
        )
    )
    try:
        table_rows = summarize_routes(
            options.get_docker_session_factories(None, DefaultHttpClientFactory())
        )
    except GridError as e:
        _fail(e)

    if json_out:
        typer.echo(json.dumps(table_rows, indent=2))
        return

    if not table_rows:
        console.print("[yellow]No docker session routes[/]")
        return

    table = Table(title="Docker session routes")
    table.add_column("Stereotype")
    table.add_column("Image", style="cyan")
    table.add_column("Slots", justify="right")
    table.add_column("Video")
    for row in table_rows:
        table.add_row(
            json.dumps(row["stereotype"], sort_keys=True),
            row["image"],
            str(row["slots"]),
            row["video_image"] or "-",
        )
    console.print(table)
