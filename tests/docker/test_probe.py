"""Tests for the docker availability probe."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from sessiongrid.core.errors import ConfigError
from sessiongrid.docker.probe import is_docker_enabled
from sessiongrid.docker.section import DockerSection


class TestIsDockerEnabled:
    def test_no_configs_means_disabled_without_probing(self, client_factory, driver):
        assert is_docker_enabled(DockerSection(), client_factory, driver_factory=driver) is False
        assert client_factory.created == []
        assert driver.probes == 0

    def test_supported_daemon(self, client_factory, driver):
        section = DockerSection(host="tcp://example:2375", configs=("img", "{}"))
        assert is_docker_enabled(section, client_factory, driver_factory=driver) is True
        assert client_factory.uris == ["http://example:2375"]
        assert driver.clients == client_factory.created

    def test_client_is_closed(self, client_factory, driver):
        is_docker_enabled(DockerSection(configs=()), client_factory, driver_factory=driver, platform="linux")
        assert [client.closed for client in client_factory.created] == [True]

    def test_default_endpoint(self, client_factory, driver):
        is_docker_enabled(DockerSection(configs=()), client_factory, driver_factory=driver, platform="win32")
        assert client_factory.uris == ["http://localhost:2376"]

    def test_unsupported_daemon(self, client_factory, make_driver):
        driver = make_driver(supported=False)
        with capture_logs() as logs:
            enabled = is_docker_enabled(
                DockerSection(configs=()), client_factory, driver_factory=driver, platform="linux"
            )
        assert enabled is False
        assert driver.probes == 1
        warning = [log for log in logs if log["event"] == "docker.sessions.unavailable"]
        assert warning[0]["docker_uri"] == "unix:/var/run/docker.sock"
        assert warning[0]["log_level"] == "warning"

    def test_malformed_endpoint_raises(self, client_factory, driver):
        section = DockerSection(host="example:notaport", configs=())
        with pytest.raises(ConfigError):
            is_docker_enabled(section, client_factory, driver_factory=driver)
        assert client_factory.created == []
