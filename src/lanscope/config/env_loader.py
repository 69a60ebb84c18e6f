"""Environment variable and configuration file loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def global_config_path() -> Path:
    """Return the path of the global ~/.lanscope/config.yml file."""
    return Path.home() / ".lanscope" / "config.yml"


def load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from .env file."""
    env_vars = {}
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    # Remove quotes if present
                    value = value.strip().strip("\"'")
                    env_vars[key.strip()] = value
    return env_vars


def load_global_config() -> dict[str, Any]:
    """Load global configuration from ~/.lanscope/config.yml."""
    config_path = global_config_path()
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        return data if isinstance(data, dict) else {}
    return {}


GLOBAL_CONFIG_TEMPLATE = """\
# LanScope global configuration.
# Environment variables and a local .env file take precedence over these values.

# Per-probe timeout in milliseconds (minimum 200)
LANSCOPE_TIMEOUT_MS: 2000

# Number of hosts scanned in parallel (1-128)
LANSCOPE_CONCURRENCY: 24

# Ports scanned when --ports is not given
LANSCOPE_PORTS: "80,443,3389,445,22"

# Print per-host details while scanning
LANSCOPE_VERBOSE: false
"""


def create_global_config() -> Path:
    """Create ~/.lanscope/config.yml from the template unless it exists."""
    config_path = global_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    if not config_path.exists():
        config_path.write_text(GLOBAL_CONFIG_TEMPLATE, encoding="utf-8")
    return config_path


def load_local_config(directory: Path | None = None) -> dict[str, str]:
    """Load the .env file of the working directory."""
    base = directory if directory is not None else Path.cwd()
    return load_env_file(base / ".env")
