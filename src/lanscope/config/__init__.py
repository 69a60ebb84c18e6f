"""
Configuration management for LanScope.

Supports multiple configuration sources in order of priority:
1. Environment variables (highest priority)
2. .env file in the working directory
3. Global config file (~/.lanscope/config.yml)
4. Default values (lowest priority)
"""

from .env_loader import (
    create_global_config,
    global_config_path,
    load_env_file,
    load_global_config,
    load_local_config,
)
from .getters import (
    get_concurrency,
    get_config,
    get_default_ports,
    get_timeout_ms,
    is_verbose,
)

__all__ = [
    # env_loader
    "create_global_config",
    "global_config_path",
    "load_env_file",
    "load_global_config",
    "load_local_config",
    # getters
    "get_concurrency",
    "get_config",
    "get_default_ports",
    "get_timeout_ms",
    "is_verbose",
]
