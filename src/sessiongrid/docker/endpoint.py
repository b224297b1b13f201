"""Docker daemon endpoint resolution.

Resolution order:

1. ``url``: used verbatim once it parses.
2. ``host``: ``http://`` is prefixed unless the value already names a
   ``tcp:``, ``http:`` or ``https:`` scheme. The URI is rebuilt from its
   userinfo, host, port and path with the scheme forced to ``http``; query
   and fragment are dropped.
3. Platform default: ``http://localhost:2376`` on Windows,
   ``unix:/var/run/docker.sock`` elsewhere.

Example:
    >>> resolve_docker_uri(DockerSection(host="tcp://example:2375"))
    'http://example:2375'
"""

from __future__ import annotations

import re
import sys
from urllib.parse import SplitResult, urlsplit, urlunsplit

from sessiongrid.core.errors import ConfigError
from sessiongrid.docker.section import DOCKER_SECTION, DockerSection

WINDOWS_DEFAULT_URI = "http://localhost:2376"
UNIX_DEFAULT_URI = "unix:/var/run/docker.sock"

_EXPLICIT_SCHEMES = ("tcp:", "http:", "https:")
_ILLEGAL_CHARS = re.compile(r"[\s\x00-\x1f\x7f<>\"{}|\\^`]")


def _split(value: str) -> SplitResult:
    match = _ILLEGAL_CHARS.search(value)
    if match:
        raise ValueError(f"Illegal character {match.group()!r} in {value!r}")
    parts = urlsplit(value)
    parts.port  # noqa: B018 - raises ValueError for a non-numeric or out-of-range port
    return parts


def _default_uri(platform: str) -> str:
    if platform == "win32":
        return WINDOWS_DEFAULT_URI
    return UNIX_DEFAULT_URI


def resolve_docker_uri(section: DockerSection, platform: str | None = None) -> str:
    """Work out the daemon endpoint for ``section``.

    Parameters
    ----------
    section
        The ``docker`` section snapshot.
    platform
        ``sys.platform`` value to pick the default for; the running
        platform when omitted.

    Raises
    ------
    ConfigError
        If ``url`` or ``host`` cannot be parsed.
    """
    option = "url"
    try:
        if section.url is not None:
            _split(section.url)
            return section.url

        if section.host is not None:
            option = "host"
            host = section.host
            if not host.startswith(_EXPLICIT_SCHEMES):
                host = f"http://{host}"
            parts = _split(host)
            if not parts.hostname:
                raise ValueError(f"No host in {section.host!r}")
            return urlunsplit(("http", parts.netloc, parts.path, "", ""))
    except ValueError as e:
        raise ConfigError("Unable to determine docker url", cause=e).with_context(
            section=DOCKER_SECTION, option=option
        ) from e

    return _default_uri(platform or sys.platform)
