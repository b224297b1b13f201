"""Bootstrap of docker-backed session factories.

``DockerOptions.get_docker_session_factories`` is the one entry point a node
calls at start-up. Each call starts from scratch:

1. snapshot the ``docker`` section and parse ``configs``;
2. probe the daemon (an unreachable daemon yields an empty table, the node
   still starts without container support);
3. warm every referenced image, plus the recording sidecar when both
   ``video-image`` and ``assets-path`` are set;
4. expand (image x stereotype x processor count) into factory slots.

Configuration and image errors propagate; the table is never returned
partially populated.

Example::

    options = DockerOptions(CompoundConfig(MapConfig(raw), EnvConfig()))
    routes = options.get_docker_session_factories(tracer, DefaultHttpClientFactory())
    for stereotype, slots in routes.items():
        node.add(stereotype, slots)
"""

from __future__ import annotations

import os
from concurrent.futures import Executor
from types import MappingProxyType
from typing import Any

from sessiongrid.core.config import Config
from sessiongrid.core.logging import LogContext, get_logger
from sessiongrid.docker.client import DockerClient, HttpClientFactory
from sessiongrid.docker.endpoint import resolve_docker_uri
from sessiongrid.docker.factories import SessionRoutes, expand_session_factories
from sessiongrid.docker.images import load_images
from sessiongrid.docker.probe import DriverFactory, is_docker_enabled
from sessiongrid.docker.section import DockerSection
from sessiongrid.docker.stereotypes import group_by_image, parse_image_configs

logger = get_logger(__name__)


def available_processors() -> int:
    """Number of session slots per (image, stereotype) pair, at least 1."""
    return max(os.cpu_count() or 1, 1)


class DockerOptions:
    """Reads the ``docker`` section and builds the session routing table.

    Parameters
    ----------
    config
        Configuration source; read afresh on every call.
    driver_factory
        Wraps an HTTP client in a driver. :class:`DockerClient` by default.
    executor
        Shared worker pool for image warm-up. A private pool per call
        when omitted.
    platform
        ``sys.platform`` value used for the default endpoint.
    """

    def __init__(
        self,
        config: Config,
        *,
        driver_factory: DriverFactory = DockerClient,
        executor: Executor | None = None,
        platform: str | None = None,
    ) -> None:
        self.config = config
        self.driver_factory = driver_factory
        self.executor = executor
        self.platform = platform

    def section(self) -> DockerSection:
        return DockerSection.from_config(self.config)

    def docker_uri(self) -> str:
        return resolve_docker_uri(self.section(), self.platform)

    def is_enabled(self, client_factory: HttpClientFactory) -> bool:
        return is_docker_enabled(
            self.section(),
            client_factory,
            driver_factory=self.driver_factory,
            platform=self.platform,
        )

    def get_docker_session_factories(
        self,
        tracer: Any,
        client_factory: HttpClientFactory,
    ) -> SessionRoutes:
        section = self.section()
        if section.configs is None:
            return MappingProxyType({})

        kinds = group_by_image(parse_image_configs(section.configs))

        if not is_docker_enabled(
            section,
            client_factory,
            driver_factory=self.driver_factory,
            platform=self.platform,
        ):
            return MappingProxyType({})

        if not kinds:
            return MappingProxyType({})

        docker_uri = resolve_docker_uri(section, self.platform)
        names = list(kinds)
        if section.video_recording_enabled:
            names.append(section.video_image)
        elif section.video_image is not None or section.assets_path is not None:
            logger.warning(
                "docker.video.disabled",
                reason="video-image and assets-path must both be set",
            )

        # The client stays open for the returned factories; it is closed only on failure
        client = client_factory.create_client(docker_uri)
        try:
            driver = self.driver_factory(client)
            with LogContext(docker_uri=docker_uri):
                images = load_images(driver, names, executor=self.executor)
                return expand_session_factories(
                    kinds,
                    images,
                    available_processors(),
                    tracer=tracer,
                    client_factory=client_factory,
                    driver=driver,
                    docker_uri=docker_uri,
                    video_image=images[section.video_image] if section.video_recording_enabled else None,
                    assets_path=section.assets_path if section.video_recording_enabled else None,
                )
        except BaseException:
            client.close()
            raise
