"""
Process-wide settings for sessiongrid.

``GridSettings`` holds the ambient knobs (logging) that are not part of any
configuration section. All fields can be set via ``SESSIONGRID_*``
environment variables or a ``.env`` file.

Tags:
    sessiongrid, configuration, settings, pydantic
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GridSettings(BaseSettings):
    """sessiongrid process settings."""

    model_config = SettingsConfigDict(
        env_prefix="SESSIONGRID_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: Literal["json", "console", "auto"] = Field(default="auto")
    service_name: str = Field(default="sessiongrid")

    @property
    def json_logs(self) -> bool | None:
        """``configure_logging`` flag: None lets it detect a TTY."""
        if self.log_format == "auto":
            return None
        return self.log_format == "json"


_settings_cache: dict[str, GridSettings] = {}


def get_settings(*, _force_reload: bool = False) -> GridSettings:
    """Load, validate, and cache a :class:`GridSettings` instance."""
    if _force_reload or "default" not in _settings_cache:
        _settings_cache["default"] = GridSettings()
    return _settings_cache["default"]


def clear_settings_cache() -> None:
    """Drop the cached settings (tests use this after patching the env)."""
    _settings_cache.clear()


__all__ = ["GridSettings", "clear_settings_cache", "get_settings"]
