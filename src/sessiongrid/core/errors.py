"""
Structured error types for sessiongrid.

Provides a small hierarchy of typed errors with metadata for error
categorization, logging and root cause analysis through error chaining.

Every error raised by sessiongrid carries:
- **Category:** What kind of error (config, container, internal)
- **Retryable:** Whether the operation could succeed if attempted again
- **Context:** Structured metadata (section, option, image, endpoint)
- **Cause:** Chained underlying exception

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                       GridError                           │
        │  (category, retryable, context, cause)                   │
        ├──────────────────────────────────────────────────────────┤
        │  ConfigError            ImageResolutionError             │
        │  (CONFIG)               (CONTAINER)                      │
        │                                                          │
        │  InterruptedOperationError                               │
        │  (INTERNAL)                                              │
        └──────────────────────────────────────────────────────────┘

Propagation:
    Configuration and image errors are fatal to the "offer container
    sessions" bootstrap step and are never retried locally. An unreachable
    daemon is not an error at all: the availability probe reports ``False``.

Examples:
    >>> error = ConfigError("Unable to determine docker url")
    >>> error.retryable
    False
    >>> error.with_context(section="docker", option="host").context.option
    'host'

Tags:
    error-handling, exception-hierarchy, error-context, sessiongrid
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    CONFIG = "CONFIG"  # Missing or malformed settings
    CONTAINER = "CONTAINER"  # Daemon, image pull, image inspect
    INTERNAL = "INTERNAL"  # Bugs, unexpected state, interrupts


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Typed fields cover the common cases; anything else lands in
    ``metadata``. ``to_dict()`` serializes the non-empty fields for logging.

    Attributes:
        section: Configuration section being read (e.g. ``docker``)
        option: Configuration option being read (e.g. ``host``)
        image: Container image name
        endpoint: Docker daemon endpoint URI
        metadata: Additional key-value pairs
    """

    section: str | None = None
    option: str | None = None
    image: str | None = None
    endpoint: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["section", "option", "image", "endpoint"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class GridError(Exception):
    """
    Base exception for all sessiongrid errors.

    Subclasses set ``default_category`` and ``default_retryable`` to give
    their domain sensible defaults.

    Examples:
        >>> error = GridError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> try:
        ...     raise OSError("socket closed")
        ... except OSError as e:
        ...     error = GridError("Daemon went away", cause=e)
        >>> error.cause
        OSError('socket closed')
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> GridError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ConfigError("Bad host").with_context(section="docker", option="host")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(GridError):
    """
    Configuration error: a malformed endpoint or an unusable ``configs`` list.

    Never retryable, the configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


# =============================================================================
# CONTAINER ERRORS
# =============================================================================


class ImageResolutionError(GridError):
    """An image could not be inspected or pulled on the Docker daemon."""

    default_category = ErrorCategory.CONTAINER
    default_retryable = False


class InterruptedOperationError(GridError):
    """The calling thread was interrupted while waiting on concurrent work."""

    default_category = ErrorCategory.INTERNAL


__all__ = [
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "GridError",
    "ImageResolutionError",
    "InterruptedOperationError",
]
