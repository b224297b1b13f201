"""
sessiongrid.core - shared primitives: errors, logging, settings, config.
"""

from __future__ import annotations

from sessiongrid.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    GridError,
    ImageResolutionError,
    InterruptedOperationError,
)
from sessiongrid.core.logging import LogContext, configure_logging, get_logger

__all__ = [
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "GridError",
    "ImageResolutionError",
    "InterruptedOperationError",
    "LogContext",
    "configure_logging",
    "get_logger",
]
