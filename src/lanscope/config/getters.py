"""Configuration getter functions."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from lanscope.modules.scan import (
    DEFAULT_CONCURRENCY,
    DEFAULT_PORTS,
    DEFAULT_TIMEOUT_MS,
    MAX_CONCURRENCY,
    MIN_TIMEOUT_MS,
)

from .env_loader import load_global_config, load_local_config

TRUTHY = {"1", "true", "yes", "on"}


def get_config(key: str, directory: Path | None = None, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. .env file in the working directory
    3. Global config file
    4. Default value

    Args:
        key: Configuration key
        directory: Optional directory holding the .env file
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    # 1. Check environment variable
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    # 2. Check local .env file
    local_config = load_local_config(directory)
    if key in local_config:
        return local_config[key]

    # 3. Check global config
    global_config = load_global_config()
    if key in global_config:
        return global_config[key]

    # 4. Return default
    return default


def _get_int(key: str, default: int, directory: Path | None) -> int:
    value = get_config(key, directory, default=default)
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def get_timeout_ms(directory: Path | None = None) -> int:
    """Get per-probe timeout in milliseconds (default: 2000, minimum 200)."""
    return max(MIN_TIMEOUT_MS, _get_int("LANSCOPE_TIMEOUT_MS", DEFAULT_TIMEOUT_MS, directory))


def get_concurrency(directory: Path | None = None) -> int:
    """Get worker count (default: 24, clamped to 1-128)."""
    value = _get_int("LANSCOPE_CONCURRENCY", DEFAULT_CONCURRENCY, directory)
    return min(MAX_CONCURRENCY, max(1, value))


def get_default_ports(directory: Path | None = None) -> str:
    """Get the port list used when none is given."""
    value = get_config("LANSCOPE_PORTS", directory, default=DEFAULT_PORTS)
    if isinstance(value, list):
        return ",".join(str(item) for item in value)
    return str(value)


def is_verbose(directory: Path | None = None) -> bool:
    """Return True when verbose output is enabled by configuration."""
    value = get_config("LANSCOPE_VERBOSE", directory, default=False)
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUTHY
