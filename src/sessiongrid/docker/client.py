"""Thin Docker Engine API driver over httpx.

Only the two calls the bootstrap needs are implemented:

- ``is_supported()``: ``GET /version`` and compare ``ApiVersion`` with
  :data:`MIN_API_VERSION`. An unreachable daemon is reported as
  ``False``, never raised.
- ``get_image(name)``: ``GET /images/{name}/json``, pulling with
  ``POST /images/create`` when the daemon does not have the image yet.

The driver is shared read-only by every session factory built from it.

Example::

    factory = DefaultHttpClientFactory()
    docker = DockerClient(factory.create_client("unix:/var/run/docker.sock"))
    if docker.is_supported():
        image = docker.get_image("selenium/standalone-firefox:latest")
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import httpx

from sessiongrid.core.errors import ImageResolutionError
from sessiongrid.core.logging import get_logger

logger = get_logger(__name__)

MIN_API_VERSION = (1, 40)

# Base URL used for requests sent over the daemon's unix socket
UNIX_SOCKET_BASE_URL = "http://docker"


@dataclass(frozen=True)
class Image:
    """A container image known to the daemon."""

    name: str
    id: str
    tags: tuple[str, ...] = ()


@runtime_checkable
class DockerDriver(Protocol):
    """What the bootstrap needs from a container runtime driver."""

    def is_supported(self) -> bool: ...

    def get_image(self, name: str) -> Image: ...


@runtime_checkable
class HttpClientFactory(Protocol):
    """Creates HTTP clients bound to a base URI."""

    def create_client(self, base_uri: str) -> httpx.Client: ...


class DefaultHttpClientFactory:
    """``httpx.Client`` factory that understands ``unix:`` endpoints.

    Parameters
    ----------
    timeout
        Default request timeout in seconds. Image pulls disable it.
    """

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = timeout

    def create_client(self, base_uri: str) -> httpx.Client:
        if base_uri.startswith("unix:"):
            socket_path = "/" + base_uri[len("unix:"):].lstrip("/")
            return httpx.Client(
                transport=httpx.HTTPTransport(uds=socket_path),
                base_url=UNIX_SOCKET_BASE_URL,
                timeout=self.timeout,
            )
        if base_uri.startswith("tcp://"):
            base_uri = "http://" + base_uri[len("tcp://"):]
        return httpx.Client(base_url=base_uri, timeout=self.timeout)


def parse_api_version(value: str) -> tuple[int, ...]:
    """``"1.43"`` -> ``(1, 43)``; anything unparsable -> ``()``."""
    try:
        return tuple(int(part) for part in value.split("."))
    except (AttributeError, ValueError):
        return ()


def split_image_name(name: str) -> tuple[str, str]:
    """Split ``repo[:tag]`` for the pull API. Digests are passed through whole."""
    if "@" in name:
        return name, ""
    repo, sep, tag = name.rpartition(":")
    if not sep or "/" in tag:
        # No tag, or the colon belonged to a registry port
        return name, "latest"
    return repo, tag


class DockerClient:
    """Docker Engine API calls used to bootstrap container sessions."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def is_supported(self) -> bool:
        try:
            response = self._client.get("/version")
            response.raise_for_status()
            body: Any = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("docker.probe.unavailable", error=str(e))
            return False

        api_version = body.get("ApiVersion", "") if isinstance(body, dict) else ""
        supported = parse_api_version(api_version) >= MIN_API_VERSION
        if not supported:
            logger.warning(
                "docker.probe.unsupported",
                api_version=api_version,
                minimum=".".join(map(str, MIN_API_VERSION)),
            )
        return supported

    def get_image(self, name: str) -> Image:
        try:
            image = self._inspect(name)
            if image is None:
                logger.info("docker.image.pulling", image=name)
                self._pull(name)
                image = self._inspect(name)
        except (httpx.HTTPError, ValueError) as e:
            raise ImageResolutionError(
                f"Unable to resolve docker image {name}", cause=e
            ).with_context(image=name) from e

        if image is None:
            raise ImageResolutionError(
                f"Docker image {name} is missing after pull"
            ).with_context(image=name)
        return image

    def _inspect(self, name: str) -> Image | None:
        response = self._client.get(f"/images/{name}/json")
        if response.status_code == 404:
            return None
        response.raise_for_status()
        body = response.json()
        return Image(
            name=name,
            id=body.get("Id", ""),
            tags=tuple(body.get("RepoTags") or ()),
        )

    def _pull(self, name: str) -> None:
        repo, tag = split_image_name(name)
        params = {"fromImage": repo}
        if tag:
            params["tag"] = tag

        # Progress is streamed as JSON lines; failures arrive in the body with a 200
        with self._client.stream(
            "POST", "/images/create", params=params, timeout=None
        ) as response:
            response.raise_for_status()
            for line in response.iter_lines():
                if not line.strip():
                    continue
                progress = json.loads(line)
                if "error" in progress:
                    raise ImageResolutionError(
                        f"Pull of {name} failed: {progress['error']}"
                    ).with_context(image=name)

    def __repr__(self) -> str:
        return f"DockerClient(base_url={str(self._client.base_url)!r})"
