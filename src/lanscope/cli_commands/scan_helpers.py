"""Helpers for scan-related CLI commands."""

import os

from lanscope.modules.scan import parse_ports, profile_ports


def normalize_verbose(verbose: bool) -> bool:
    """Resolve effective verbose flag from CLI arg and env var."""
    effective = verbose if isinstance(verbose, bool) else False
    if effective:
        return True
    env_verbose = os.environ.get("LANSCOPE_VERBOSE", "").lower()
    return env_verbose in {"1", "true", "yes", "on"}


def coerce_positive_int(value: int | None, default: int) -> int:
    """Return value when positive int-like, otherwise fallback default."""
    return max(1, int(value)) if isinstance(value, int) else default


def merge_port_input(ports: str, profiles: list[str] | None) -> str:
    """Combine explicit port text with named profiles into one port list.

    Raises:
        ValueError: a profile name is unknown.
    """
    merged = set(parse_ports(ports))
    for name in profiles or []:
        merged.update(profile_ports(name))
    return ",".join(str(port) for port in sorted(merged))
