"""Tests for concurrent image warm-up."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest
from structlog.testing import capture_logs

from sessiongrid.core.errors import ImageResolutionError, InterruptedOperationError
from sessiongrid.docker.client import Image
from sessiongrid.docker.images import load_images


class TestLoadImages:
    def test_resolves_every_image(self, driver):
        images = load_images(driver, ["img-a", "img-b", "img-c"])
        assert list(images) == ["img-a", "img-b", "img-c"]
        assert images["img-b"] == Image(name="img-b", id="sha256:img-b")

    def test_duplicates_resolved_once(self, driver):
        images = load_images(driver, ["img-a", "img-b", "img-a"])
        assert list(images) == ["img-a", "img-b"]
        assert sorted(driver.requested) == ["img-a", "img-b"]

    def test_empty(self, driver):
        assert load_images(driver, []) == {}
        assert driver.requested == []

    def test_failure_is_propagated_unchanged(self, make_driver):
        error = ImageResolutionError("pull denied").with_context(image="img-b")
        driver = make_driver(failures={"img-b": error})

        with capture_logs() as logs:
            with pytest.raises(ImageResolutionError) as exc_info:
                load_images(driver, ["img-a", "img-b", "img-c"])

        assert exc_info.value is error
        failed = [log for log in logs if log["event"] == "docker.images.failed"]
        assert failed[0]["image"] == "img-b"

    def test_fails_fast_without_waiting_for_siblings(self, blocking_driver):
        driver = blocking_driver(
            blocked={"img-slow"},
            failures={"img-bad": ImageResolutionError("no such image")},
        )
        try:
            with pytest.raises(ImageResolutionError):
                load_images(driver, ["img-slow", "img-bad"])
            assert "img-slow" not in driver.finished
        finally:
            driver.release.set()

    def test_keyboard_interrupt_is_translated(self, driver):
        with patch("sessiongrid.docker.images.wait", side_effect=KeyboardInterrupt):
            with pytest.raises(InterruptedOperationError) as exc_info:
                load_images(driver, ["img-a"])
        assert isinstance(exc_info.value.__cause__, KeyboardInterrupt)

    def test_shared_executor_is_left_running(self, driver):
        executor = ThreadPoolExecutor(max_workers=2)
        try:
            load_images(driver, ["img-a", "img-b"], executor=executor)
            assert executor.submit(lambda: "still running").result() == "still running"
        finally:
            executor.shutdown()
