"""Expansion of image stereotypes into session factory slots.

For every (image, stereotype) pair, ``replica_count`` interchangeable
:class:`DockerSessionFactory` slots are created. The result maps each
stereotype to its slots; a stereotype served by several images collects the
slots of all of them, in configuration order.

The routing table is read-only once built.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from sessiongrid.core.errors import ImageResolutionError
from sessiongrid.core.logging import get_logger
from sessiongrid.docker.capabilities import Capabilities
from sessiongrid.docker.client import DockerDriver, HttpClientFactory, Image
from sessiongrid.docker.session import DockerSessionFactory

logger = get_logger(__name__)

SessionRoutes = Mapping[Capabilities, tuple[DockerSessionFactory, ...]]


def expand_session_factories(
    kinds: Mapping[str, Iterable[Capabilities]],
    images: Mapping[str, Image],
    replica_count: int,
    *,
    tracer: Any,
    client_factory: HttpClientFactory,
    driver: DockerDriver,
    docker_uri: str,
    video_image: Image | None = None,
    assets_path: str | None = None,
) -> SessionRoutes:
    """Build the stereotype -> session factories routing table.

    Video recording is wired into every slot only when both
    ``video_image`` and ``assets_path`` are given.

    Raises
    ------
    ValueError
        If ``replica_count`` is below 1.
    ImageResolutionError
        If an image in ``kinds`` has no entry in ``images``.
    """
    if replica_count < 1:
        raise ValueError(f"replica_count must be at least 1, got {replica_count}")

    missing = [name for name in kinds if name not in images]
    if missing:
        raise ImageResolutionError(f"Docker images not resolved: {', '.join(missing)}")

    recording = video_image is not None and assets_path is not None
    routes: dict[Capabilities, list[DockerSessionFactory]] = {}

    for name, stereotypes in kinds.items():
        image = images[name]
        for stereotype in stereotypes:
            slots = routes.setdefault(stereotype, [])
            for _ in range(replica_count):
                slots.append(
                    DockerSessionFactory(
                        tracer=tracer,
                        client_factory=client_factory,
                        driver=driver,
                        docker_uri=docker_uri,
                        image=image,
                        stereotype=stereotype,
                        video_image=video_image if recording else None,
                        assets_path=assets_path if recording else None,
                    )
                )
            logger.info(
                "docker.image.mapped",
                image=name,
                stereotype=stereotype.to_dict(),
                count=replica_count,
            )

    return MappingProxyType({caps: tuple(slots) for caps, slots in routes.items()})
