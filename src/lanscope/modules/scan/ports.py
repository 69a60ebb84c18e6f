"""Port list parsing, protocol hints and port profiles."""

import re
from enum import Enum

MIN_PORT = 1
MAX_PORT = 65535

SECURE_PORTS = frozenset({443, 8443, 9443})

DEFAULT_PORTS = "80,443,3389,445,22"

PORT_PROFILES: dict[str, tuple[str, list[int]]] = {
    "web": ("Web & services", [80, 443, 8080, 8443]),
    "admin": ("Remote administration", [22, 3389, 5900, 5985]),
    "sharing": ("File sharing", [139, 445, 548, 2049]),
    "iot": ("IoT devices", [1883, 5683, 8883]),
}


class ProtocolHint(Enum):
    """Scheme used to build the probe URL."""

    PLAIN = "http"
    SECURE = "https"


_SEPARATORS = re.compile(r"[,\s]+")
# Leading digits only, so "443." or "80;" still yield a port.
_LEADING_INT = re.compile(r"\+?(\d+)")


def _parse_token(token: str) -> int | None:
    match = _LEADING_INT.match(token)
    if not match:
        return None
    port = int(match.group(1))
    if MIN_PORT <= port <= MAX_PORT:
        return port
    return None


def parse_ports(raw: str | None) -> list[int]:
    """Parse free-form port text into unique ports in ascending order.

    Tokens are separated by any run of commas or whitespace. Tokens that are
    not numbers or fall outside 1-65535 are dropped silently; an empty list
    is a valid result.
    """
    if not raw:
        return []

    ports: set[int] = set()
    for token in _SEPARATORS.split(raw):
        token = token.strip()
        if not token:
            continue
        port = _parse_token(token)
        if port is not None:
            ports.add(port)
    return sorted(ports)


def protocol_for_port(port: int) -> ProtocolHint:
    """Return the scheme used to probe ``port``."""
    return ProtocolHint.SECURE if port in SECURE_PORTS else ProtocolHint.PLAIN


def profile_ports(name: str) -> list[int]:
    """Return the ports of a named profile."""
    key = name.strip().lower()
    if key not in PORT_PROFILES:
        supported = ", ".join(PORT_PROFILES)
        raise ValueError(f"Unknown port profile: {name}. Supported values: {supported}.")
    return list(PORT_PROFILES[key][1])
