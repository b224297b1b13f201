"""Should docker-backed sessions be offered at all?"""

from __future__ import annotations

from collections.abc import Callable

import httpx

from sessiongrid.core.logging import get_logger
from sessiongrid.docker.client import DockerClient, DockerDriver, HttpClientFactory
from sessiongrid.docker.endpoint import resolve_docker_uri
from sessiongrid.docker.section import DockerSection

logger = get_logger(__name__)

DriverFactory = Callable[[httpx.Client], DockerDriver]


def is_docker_enabled(
    section: DockerSection,
    client_factory: HttpClientFactory,
    *,
    driver_factory: DriverFactory = DockerClient,
    platform: str | None = None,
) -> bool:
    """Single synchronous check, no retries.

    Returns ``False`` without touching the network when no ``configs`` are
    set. Otherwise asks the daemon at the resolved endpoint whether it is
    reachable and recent enough. A malformed endpoint still raises
    :class:`~sessiongrid.core.errors.ConfigError`.
    """
    if section.configs is None:
        return False

    docker_uri = resolve_docker_uri(section, platform)
    client = client_factory.create_client(docker_uri)
    try:
        supported = driver_factory(client).is_supported()
    finally:
        client.close()

    if not supported:
        logger.warning("docker.sessions.unavailable", docker_uri=docker_uri)
    return supported
