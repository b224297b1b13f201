"""Tests for sessiongrid.core.errors."""

from __future__ import annotations

import pytest

from sessiongrid.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    GridError,
    ImageResolutionError,
    InterruptedOperationError,
)


class TestErrorContext:
    def test_empty_context_serializes_to_empty_dict(self):
        assert ErrorContext().to_dict() == {}

    def test_only_set_fields_are_serialized(self):
        ctx = ErrorContext(section="docker", image="selenium/standalone-firefox")
        ctx.metadata["attempt"] = 1
        assert ctx.to_dict() == {
            "section": "docker",
            "image": "selenium/standalone-firefox",
            "attempt": 1,
        }


class TestGridError:
    def test_defaults(self):
        error = GridError("boom")
        assert error.message == "boom"
        assert error.category == ErrorCategory.INTERNAL
        assert error.retryable is False
        assert error.cause is None

    def test_cause_is_chained(self):
        cause = OSError("socket closed")
        error = GridError("daemon went away", cause=cause)
        assert error.cause is cause
        assert error.__cause__ is cause

    def test_with_context_sets_known_fields_and_metadata(self):
        error = GridError("bad").with_context(option="host", attempt=2)
        assert error.context.option == "host"
        assert error.context.metadata == {"attempt": 2}

    def test_to_dict(self):
        error = ConfigError("bad host", cause=ValueError("port")).with_context(
            section="docker"
        )
        assert error.to_dict() == {
            "error_type": "ConfigError",
            "message": "bad host",
            "category": "CONFIG",
            "retryable": False,
            "context": {"section": "docker"},
            "cause": "port",
        }

    def test_repr(self):
        assert repr(ConfigError("x")) == "ConfigError('x', category=CONFIG)"


class TestSubclasses:
    @pytest.mark.parametrize(
        ("cls", "category"),
        [
            (ConfigError, ErrorCategory.CONFIG),
            (ImageResolutionError, ErrorCategory.CONTAINER),
            (InterruptedOperationError, ErrorCategory.INTERNAL),
        ],
    )
    def test_categories(self, cls, category):
        error = cls("x")
        assert isinstance(error, GridError)
        assert error.category == category
        assert error.retryable is False
