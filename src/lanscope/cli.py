"""LanScope CLI - concurrent reachability scanner for IPv4 ranges."""

from lanscope.cli_commands.shared import app, console
from lanscope.config import (
    create_global_config,
    get_concurrency,
    get_default_ports,
    get_timeout_ms,
    global_config_path,
    is_verbose,
)
from lanscope.modules.report import write_csv_report
from lanscope.modules.scan import ScanCoordinator
from lanscope.tools.http import HTTPProbeTransport
from lanscope.utils.async_utils import safe_async_run

# Command modules register themselves on ``app`` when imported.
from lanscope.cli_commands import config_command as _config_command  # noqa: E402,F401
from lanscope.cli_commands import profiles_command as _profiles_command  # noqa: E402,F401
from lanscope.cli_commands import scan_command as _scan_command  # noqa: E402,F401

__all__ = [
    "HTTPProbeTransport",
    "ScanCoordinator",
    "app",
    "console",
    "create_global_config",
    "get_concurrency",
    "get_default_ports",
    "get_timeout_ms",
    "global_config_path",
    "is_verbose",
    "main",
    "safe_async_run",
    "version",
    "write_csv_report",
]


@app.command()
def version() -> None:
    """Show the installed LanScope version."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        current_version = pkg_version("lanscope")
    except PackageNotFoundError:
        current_version = "0.0.0+unknown"

    console.print(f"LanScope {current_version}")


def main():
    """Entry point for the CLI."""
    app()
