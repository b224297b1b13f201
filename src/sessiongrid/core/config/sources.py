"""
Sectioned configuration sources.

A ``Config`` answers two questions about an option inside a named section:
its single value (``get``) and its list of values (``get_all``). Both return
``None`` when the option is absent, so callers can tell "not configured"
apart from "configured empty".

Sources:
    MapConfig:       nested ``{section: {option: value}}`` mapping (CLI flags,
                     TOML/YAML documents already loaded by the caller).
    EnvConfig:       ``SESSIONGRID_<SECTION>_<OPTION>`` environment variables.
    CompoundConfig:  ordered chain, the first source with an answer wins.

Override precedence is expressed by chain order, e.g. CLI flags before the
environment::

    config = CompoundConfig(MapConfig({"docker": flags}), EnvConfig())

Tags:
    config, sections, environment, sessiongrid
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from sessiongrid.core.errors import ConfigError

ENV_PREFIX = "SESSIONGRID_"


@runtime_checkable
class Config(Protocol):
    """Read-only access to sectioned configuration."""

    def get(self, section: str, option: str) -> str | None: ...

    def get_all(self, section: str, option: str) -> list[Any] | None: ...


class MapConfig:
    """Configuration backed by a nested mapping.

    Scalar values are returned as strings by ``get``; list values are
    returned as-is by ``get_all``, and a scalar is promoted to a
    one-element list.
    """

    def __init__(self, raw: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._raw = {section: dict(values) for section, values in (raw or {}).items()}

    def get(self, section: str, option: str) -> str | None:
        value = self._raw.get(section, {}).get(option)
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            raise ConfigError(
                f"Expected a single value for {section}.{option}, got a list"
            ).with_context(section=section, option=option)
        return str(value)

    def get_all(self, section: str, option: str) -> list[Any] | None:
        value = self._raw.get(section, {}).get(option)
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]

    def __repr__(self) -> str:
        return f"MapConfig(sections={sorted(self._raw)})"


class EnvConfig:
    """Configuration read from ``SESSIONGRID_*`` environment variables.

    ``docker`` / ``video-image`` is read from
    ``SESSIONGRID_DOCKER_VIDEO_IMAGE``. List options are given as a JSON
    array; any other value is a single-element list.
    """

    def __init__(self, environ: Mapping[str, str] | None = None, prefix: str = ENV_PREFIX) -> None:
        self._environ = environ if environ is not None else os.environ
        self.prefix = prefix

    def env_var(self, section: str, option: str) -> str:
        name = f"{self.prefix}{section}_{option}"
        return name.replace("-", "_").replace(".", "_").upper()

    def get(self, section: str, option: str) -> str | None:
        return self._environ.get(self.env_var(section, option))

    def get_all(self, section: str, option: str) -> list[Any] | None:
        name = self.env_var(section, option)
        value = self._environ.get(name)
        if value is None:
            return None
        if not value.lstrip().startswith("["):
            return [value]
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"{name} is not a valid JSON array", cause=e
            ).with_context(section=section, option=option)
        if not isinstance(parsed, list):
            raise ConfigError(f"{name} must be a JSON array").with_context(
                section=section, option=option
            )
        return parsed


class CompoundConfig:
    """Chain of sources; the first one that knows an option answers."""

    def __init__(self, *configs: Config) -> None:
        self.configs = list(configs)

    def get(self, section: str, option: str) -> str | None:
        for config in self.configs:
            value = config.get(section, option)
            if value is not None:
                return value
        return None

    def get_all(self, section: str, option: str) -> list[Any] | None:
        for config in self.configs:
            values = config.get_all(section, option)
            if values is not None:
                return values
        return None
