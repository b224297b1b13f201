"""Capability sets and image configuration records.

A ``Capabilities`` is the stereotype a node advertises for one kind of
browser session (``{"browserName": "firefox", "platformName": "linux"}``).
It is immutable and hashable by content, so it can key the routing table.

An ``ImageConfig`` pairs a container image with the stereotype it serves.

Example:
    >>> caps = Capabilities.from_json('{"browserName": "firefox"}')
    >>> caps == Capabilities(browserName="firefox")
    True
    >>> ImageConfig(image="selenium/standalone-firefox", stereotype=caps).image
    'selenium/standalone-firefox'
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from sessiongrid.core.errors import ConfigError

_PAYLOAD = TypeAdapter(dict[str, Any])


class Capabilities(Mapping[str, Any]):
    """Immutable, hashable mapping of capability name to JSON value."""

    __slots__ = ("_data", "_key")

    def __init__(self, data: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        merged = dict(data or {})
        merged.update(kwargs)
        self._key = json.dumps(merged, sort_keys=True, separators=(",", ":"))
        # Round-trip so nested values cannot be mutated through the caller's objects
        self._data: dict[str, Any] = json.loads(self._key)

    @classmethod
    def from_json(cls, payload: str | bytes) -> Capabilities:
        """Deserialize a JSON object payload."""
        try:
            data = _PAYLOAD.validate_json(payload)
        except ValidationError as e:
            raise ConfigError(
                f"Unable to parse capabilities from {payload!r}", cause=e
            ) from e
        return cls(data)

    @property
    def browser_name(self) -> str | None:
        return self._data.get("browserName")

    @property
    def platform_name(self) -> str | None:
        return self._data.get("platformName")

    def to_dict(self) -> dict[str, Any]:
        return json.loads(self._key)

    def to_json(self) -> str:
        return self._key

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __hash__(self) -> int:
        return hash(self._key)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Capabilities):
            return self._key == other._key
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Capabilities({self._data!r})"


class ImageConfig(BaseModel):
    """One image and the stereotype it serves.

    ``stereotype`` accepts a ``Capabilities``, a plain mapping or a JSON
    object string.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    image: str = Field(min_length=1, description="Container image reference")
    stereotype: Capabilities = Field(description="Capabilities served by the image")

    @field_validator("stereotype", mode="before")
    @classmethod
    def _coerce_stereotype(cls, value: Any) -> Any:
        if isinstance(value, (str, bytes)):
            return Capabilities.from_json(value)
        if isinstance(value, Mapping) and not isinstance(value, Capabilities):
            return Capabilities(value)
        return value
