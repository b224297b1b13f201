"""sessiongrid.docker — docker-backed browser session routing.

Builds the table that maps each advertised stereotype (capability set) to the
session factory slots able to serve it, one slot per host processor for every
configured (image, stereotype) pair.

Key Concepts:
    DockerSection: Snapshot of the ``docker`` configuration section.
    resolve_docker_uri: Endpoint from ``url``, ``host`` or platform default.
    is_docker_enabled: Availability probe; unreachable means disabled.
    parse_image_configs / group_by_image: ``configs`` into stereotypes per image.
    load_images: Concurrent, fail-fast image warm-up.
    expand_session_factories: (image x stereotype x slots) routing table.
    DockerOptions: The bootstrap entry point tying the above together.

Related Modules:
    - :mod:`sessiongrid.docker.client` — httpx Docker Engine driver
    - :mod:`sessiongrid.docker.session` — session factory slots
    - :mod:`sessiongrid.cli.docker` — ``sessiongrid docker`` commands

Tags:
    docker, containers, sessions, routing, stereotypes, images
"""

from __future__ import annotations

from sessiongrid.docker.capabilities import Capabilities, ImageConfig
from sessiongrid.docker.client import (
    DefaultHttpClientFactory,
    DockerClient,
    DockerDriver,
    HttpClientFactory,
    Image,
)
from sessiongrid.docker.endpoint import resolve_docker_uri
from sessiongrid.docker.factories import SessionRoutes, expand_session_factories
from sessiongrid.docker.images import load_images
from sessiongrid.docker.options import DockerOptions, available_processors
from sessiongrid.docker.probe import is_docker_enabled
from sessiongrid.docker.section import DOCKER_SECTION, DockerSection
from sessiongrid.docker.session import DockerSessionFactory
from sessiongrid.docker.stereotypes import group_by_image, parse_image_configs

__all__ = [
    "DOCKER_SECTION",
    "Capabilities",
    "DefaultHttpClientFactory",
    "DockerClient",
    "DockerDriver",
    "DockerOptions",
    "DockerSection",
    "DockerSessionFactory",
    "HttpClientFactory",
    "Image",
    "ImageConfig",
    "SessionRoutes",
    "available_processors",
    "expand_session_factories",
    "group_by_image",
    "is_docker_enabled",
    "load_images",
    "parse_image_configs",
    "resolve_docker_uri",
]
