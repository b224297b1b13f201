"""The ``docker`` configuration section.

``DockerSection`` is a snapshot of the section taken from a
:class:`~sessiongrid.core.config.Config` at call time. It is rebuilt on every
bootstrap so the routing table always reflects the current configuration.

| Option        | Field         |
|---------------|---------------|
| url           | url           |
| host          | host          |
| configs       | configs       |
| video-image   | video_image   |
| assets-path   | assets_path   |
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sessiongrid.core.config import Config

DOCKER_SECTION = "docker"


class DockerSection(BaseModel):
    """Values of the ``docker`` section; ``None`` means not configured."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str | None = Field(default=None, description="Explicit daemon endpoint")
    host: str | None = Field(default=None, description="Daemon host, scheme-normalized")
    configs: tuple[Any, ...] | None = Field(
        default=None,
        description="Image/stereotype pairs; absence disables docker sessions",
    )
    video_image: str | None = Field(
        default=None, alias="video-image", description="Recording sidecar image"
    )
    assets_path: str | None = Field(
        default=None, alias="assets-path", description="Where recordings are stored"
    )

    @classmethod
    def from_config(cls, config: Config) -> DockerSection:
        configs = config.get_all(DOCKER_SECTION, "configs")
        return cls(
            url=config.get(DOCKER_SECTION, "url"),
            host=config.get(DOCKER_SECTION, "host"),
            configs=tuple(configs) if configs is not None else None,
            video_image=config.get(DOCKER_SECTION, "video-image"),
            assets_path=config.get(DOCKER_SECTION, "assets-path"),
        )

    @property
    def video_recording_enabled(self) -> bool:
        """Recording needs both the sidecar image and an assets path."""
        return self.video_image is not None and self.assets_path is not None
