"""Debug utilities for verbose scan sessions.

Thread-safe debug output with rich formatting.
"""

from __future__ import annotations

import threading
from typing import Any

from rich.console import Console

from lanscope.modules.scan import HostResult, PortStatus, ScanConfiguration

# Thread-local storage for debug state
_debug_state = threading.local()

_STATUS_STYLES = {
    PortStatus.OPEN: "green",
    PortStatus.CLOSED: "yellow",
    PortStatus.TIMEOUT: "dim",
    PortStatus.ERROR: "red",
}


def set_debug_enabled(enabled: bool) -> None:
    """Set debug mode for the current thread/session."""
    _debug_state.enabled = enabled


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled for the current thread/session."""
    return getattr(_debug_state, "enabled", False)


def _console() -> Console:
    console = getattr(_debug_state, "console", None)
    return console if console is not None else Console(stderr=True)


def set_debug_console(console: Console | None) -> None:
    """Route debug output to ``console`` (stderr when None)."""
    _debug_state.console = console


def debug_print(category: str, message: str, **data: Any) -> None:
    """Print debug information if debug mode is enabled.

    Args:
        category: Debug category (scan, host, config)
        message: Main message to display
        **data: Additional key-value pairs to display
    """
    if not is_debug_enabled():
        return
    console = _console()
    console.print(f"[DEBUG:{category}] {message}", style="bold cyan", highlight=False)
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            console.print(f"  {key}: {', '.join(str(v) for v in value)}", style="dim")
        elif isinstance(value, str) and len(value) > 100:
            console.print(f"  {key}: {value[:100]}... ({len(value)} chars)", style="dim")
        else:
            console.print(f"  {key}: {value}", style="dim")


def debug_scan_config(config: ScanConfiguration) -> None:
    """Log the effective scan configuration in debug mode."""
    debug_print(
        "scan",
        f"{config.start_address} → {config.end_address}",
        Ports=list(config.ports),
        Timeout=f"{config.timeout_ms} ms",
        Workers=config.concurrency,
    )


def debug_host(host: HostResult) -> None:
    """Log one finished host with per-port statuses in debug mode."""
    if not is_debug_enabled():
        return
    parts = []
    for item in host.ports:
        style = _STATUS_STYLES[item.status]
        detail = f" {item.latency_ms}ms" if item.latency_ms is not None else ""
        parts.append(f"[{style}]{item.port}:{item.status.value}{detail}[/]")
    flag = "responded" if host.responded else "silent"
    _console().print(f"[DEBUG:host] {host.ip} ({flag}) " + " ".join(parts))
