"""
Parsing of the endpoint strings found in the server table.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = [
    "DEFAULT_PROBE_PATH",
    "EndpointInfo",
    "parse_endpoint_url",
]

DEFAULT_PROBE_PATH = "/load.html"

_SCHEME_RE = re.compile(r"^(https?)://")
_HOST_RE = re.compile(r"([^:|^/]*)(.*)$", re.DOTALL)
_PORT_RE = re.compile(r"^:(\d+)")
_PATH_RE = re.compile(r"^:?(/.*)", re.DOTALL)


@dataclass(frozen=True)
class EndpointInfo:
    is_secure: bool = False
    port: int = 80
    path: str = DEFAULT_PROBE_PATH
    host: str = ""

    @property
    def scheme(self) -> str:
        return "https" if self.is_secure else "http"

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}{self.path}"


def parse_endpoint_url(server_url: str) -> EndpointInfo:
    """
    Split ``server_url`` into transport, host, port and path.

    ``https://`` selects TLS. Any explicit scheme defaults the port to 443
    unless a port is given; a bare host stays on port 80. Strings
    without a usable host produce an empty host rather than an error; probing
    such an endpoint simply fails.
    """
    is_secure = False
    port = 80
    path = DEFAULT_PROBE_PATH

    rest = server_url
    scheme = _SCHEME_RE.match(rest)
    if scheme:
        is_secure = scheme.group(1) == "https"
        port = 443
        rest = rest[scheme.end():]

    host_match = _HOST_RE.match(rest)
    host, port_and_path = host_match.group(1), host_match.group(2)

    port_match = _PORT_RE.match(port_and_path)
    if port_match:
        port = int(port_match.group(1))
        port_and_path = port_and_path[port_match.end():]

    path_match = _PATH_RE.match(port_and_path)
    if path_match:
        path = path_match.group(1)

    return EndpointInfo(is_secure=is_secure, port=port, path=path, host=host)
