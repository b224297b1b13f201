"""
Configuration for sessiongrid.

- :mod:`~sessiongrid.core.config.sources` — sectioned ``Config`` sources
  (mapping, environment, compound chain)
"""

from __future__ import annotations

from .sources import CompoundConfig, Config, EnvConfig, MapConfig

__all__ = [
    "CompoundConfig",
    "Config",
    "EnvConfig",
    "MapConfig",
]
