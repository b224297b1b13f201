"""
Shared pytest fixtures and configuration for sessiongrid tests.

This module provides:
- Recording stand-ins for the HTTP client factory and the docker driver,
  so no test needs a docker daemon
- Auto-marking of tests by location
"""

from __future__ import annotations

import sys
import threading
from pathlib import Path
from typing import Any

import pytest

# Ensure sessiongrid package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sessiongrid.core.settings import clear_settings_cache
from sessiongrid.docker.client import Image


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Stand-ins for external collaborators
# =============================================================================


class RecordingClient:
    """Minimal stand-in for an ``httpx.Client``."""

    def __init__(self, base_uri: str) -> None:
        self.base_uri = base_uri
        self.closed = False

    def close(self) -> None:
        self.closed = True


class RecordingClientFactory:
    """Client factory that records every client it creates."""

    def __init__(self) -> None:
        self.created: list[RecordingClient] = []

    def create_client(self, base_uri: str) -> RecordingClient:
        client = RecordingClient(base_uri)
        self.created.append(client)
        return client

    @property
    def uris(self) -> list[str]:
        return [client.base_uri for client in self.created]


class StubDriver:
    """Docker driver stand-in.

    ``failures`` maps image names to the exception ``get_image`` raises.
    """

    def __init__(
        self,
        *,
        supported: bool = True,
        failures: dict[str, BaseException] | None = None,
    ) -> None:
        self.supported = supported
        self.failures = failures or {}
        self.probes = 0
        self.requested: list[str] = []
        self.clients: list[Any] = []
        self._lock = threading.Lock()

    def __call__(self, client: Any) -> StubDriver:
        # Lets the stub double as the driver factory
        self.clients.append(client)
        return self

    def is_supported(self) -> bool:
        self.probes += 1
        return self.supported

    def get_image(self, name: str) -> Image:
        with self._lock:
            self.requested.append(name)
        if name in self.failures:
            raise self.failures[name]
        return Image(name=name, id=f"sha256:{name}")


class BlockingDriver(StubDriver):
    """Holds ``get_image`` for ``blocked`` images until ``release`` is set."""

    def __init__(self, blocked: set[str], **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.blocked = set(blocked)
        self.release = threading.Event()
        self.finished: list[str] = []

    def get_image(self, name: str) -> Image:
        if name in self.blocked:
            self.release.wait(timeout=5)
        image = super().get_image(name)
        self.finished.append(name)
        return image


@pytest.fixture
def client_factory() -> RecordingClientFactory:
    return RecordingClientFactory()


@pytest.fixture
def driver() -> StubDriver:
    return StubDriver()


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; drop them around every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def make_driver():
    """Build a ``StubDriver`` with custom support/failure behaviour."""
    return StubDriver


@pytest.fixture
def blocking_driver():
    return BlockingDriver
