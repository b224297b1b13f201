"""Docker-backed session factory handles.

A ``DockerSessionFactory`` is one execution slot: it is bound to a single
image and stereotype and can later start one browser session in a container.
Slots for the same (image, stereotype) pair are interchangeable, so equality
is identity.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sessiongrid.docker.capabilities import Capabilities
from sessiongrid.docker.client import DockerDriver, HttpClientFactory, Image


@dataclass(frozen=True, eq=False)
class DockerSessionFactory:
    """Binds a stereotype to the image and daemon that will serve it."""

    tracer: Any
    client_factory: HttpClientFactory
    driver: DockerDriver
    docker_uri: str
    image: Image
    stereotype: Capabilities
    video_image: Image | None = None
    assets_path: str | None = None

    def __post_init__(self) -> None:
        if (self.video_image is None) != (self.assets_path is None):
            raise ValueError("video_image and assets_path must be given together")

    @property
    def records_video(self) -> bool:
        return self.video_image is not None

    def test(self, capabilities: Mapping[str, Any]) -> bool:
        """Whether a session request can be served by this slot.

        Every stereotype entry the request also names (with a non-null
        value) must be equal; entries the request leaves out are ignored.
        """
        for name, expected in self.stereotype.items():
            requested = capabilities.get(name)
            if requested is not None and requested != expected:
                return False
        return True

    def __repr__(self) -> str:
        video = f", video_image={self.video_image.name!r}" if self.video_image else ""
        return (
            f"DockerSessionFactory(image={self.image.name!r}, "
            f"stereotype={self.stereotype!r}{video})"
        )
