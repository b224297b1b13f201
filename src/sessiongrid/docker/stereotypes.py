"""Parsing of the ``docker.configs`` option.

Two shapes are accepted:

- the flat form, alternating image name and JSON stereotype payload::

      ["selenium/standalone-firefox", '{"browserName": "firefox"}',
       "selenium/standalone-chrome", '{"browserName": "chrome"}']

- the record form, one mapping per image/stereotype pair::

      [{"image": "selenium/standalone-firefox",
        "stereotype": {"browserName": "firefox"}}]

Both parse to a list of :class:`ImageConfig` records, which
:func:`group_by_image` collapses into ``{image: [stereotype, ...]}``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from sessiongrid.core.errors import ConfigError
from sessiongrid.docker.capabilities import Capabilities, ImageConfig
from sessiongrid.docker.section import DOCKER_SECTION


def _config_error(message: str, cause: BaseException | None = None) -> ConfigError:
    return ConfigError(message, cause=cause).with_context(
        section=DOCKER_SECTION, option="configs"
    )


def _parse_records(entries: Sequence[Any]) -> list[ImageConfig]:
    configs = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise _config_error(
                f"Cannot mix image records with flat entries: {entry!r}"
            )
        try:
            configs.append(ImageConfig.model_validate(entry))
        except ConfigError as e:
            e.with_context(section=DOCKER_SECTION, option="configs")
            raise
        except ValidationError as e:
            raise _config_error(f"Invalid image config {dict(entry)!r}", cause=e) from e
    return configs


def _parse_pairs(entries: Sequence[Any]) -> list[ImageConfig]:
    if len(entries) % 2:
        raise _config_error(f"Unable to find JSON config for image {entries[-1]!r}")

    configs = []
    for image, payload in zip(entries[0::2], entries[1::2]):
        if not isinstance(image, str):
            raise _config_error(f"Expected an image name, got {image!r}")
        try:
            configs.append(ImageConfig(image=image, stereotype=payload))
        except ConfigError as e:
            e.with_context(section=DOCKER_SECTION, option="configs", image=image)
            raise
        except ValidationError as e:
            raise _config_error(f"Invalid image config for {image!r}", cause=e) from e
    return configs


def parse_image_configs(entries: Sequence[Any]) -> list[ImageConfig]:
    """Parse ``docker.configs`` into image/stereotype records.

    Raises
    ------
    ConfigError
        On an odd-length flat list, a malformed payload, or a list mixing
        both shapes.
    """
    if not entries:
        return []
    if isinstance(entries[0], Mapping):
        return _parse_records(entries)
    return _parse_pairs(entries)


def group_by_image(configs: Iterable[ImageConfig]) -> dict[str, list[Capabilities]]:
    """Collapse records into distinct stereotypes per image.

    Duplicate stereotypes for an image are dropped; images and stereotypes
    keep the order they were first seen in.
    """
    kinds: dict[str, list[Capabilities]] = {}
    for config in configs:
        stereotypes = kinds.setdefault(config.image, [])
        if config.stereotype not in stereotypes:
            stereotypes.append(config.stereotype)
    return kinds
