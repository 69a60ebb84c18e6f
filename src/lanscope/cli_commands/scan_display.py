"""Live progress panel and result tables for the scan command."""

from __future__ import annotations

import time
from collections.abc import Callable
from contextlib import aclosing
from dataclasses import dataclass, field
from typing import Any

from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from lanscope.modules.scan import (
    HostResult,
    PortStatus,
    ResultStore,
    ScanConfiguration,
    ScanCoordinator,
    ScanState,
    ScanSummary,
    ScanUpdate,
)
from lanscope.utils.debug import debug_host

STATUS_STYLES = {
    PortStatus.OPEN: "green",
    PortStatus.CLOSED: "yellow",
    PortStatus.TIMEOUT: "dim",
    PortStatus.ERROR: "red",
}


@dataclass
class ScanProgressState:
    """Tracks progress and findings for the live display."""

    completed: int = 0
    total: int = 0
    responsive: list[str] = field(default_factory=list)
    started: float = field(default_factory=time.perf_counter)
    complete: bool = False

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.started

    def apply(self, update: ScanUpdate) -> None:
        self.completed = update.progress.completed
        self.total = update.progress.total
        if update.host.open_ports:
            self.responsive.append(update.host.ip)


def create_scan_panel(state: ScanProgressState, config: ScanConfiguration) -> Panel:
    """Build a Rich Panel showing scan progress."""
    percent = round(state.completed / state.total * 100) if state.total else 0

    if state.complete:
        status = Text("✓ Complete", style="green")
    else:
        status = Text("● Scanning", style="cyan")

    content = Text()
    content.append_text(status)
    content.append(
        f"    {state.completed}/{state.total} hosts ({percent}%)"
        f"    ⏱ {state.elapsed:.1f}s    {len(state.responsive)} with open ports",
        style="dim",
    )

    if state.responsive:
        hosts = ", ".join(state.responsive[-5:])
        if len(state.responsive) > 5:
            hosts = "..., " + hosts
        content.append("\n")
        content.append(f"Open: {hosts}", style="green")

    return Panel(
        content,
        title="[bold cyan]LanScope[/] [dim](HTTP probe)[/]",
        subtitle=f"[dim]{config.start_address} → {config.end_address}[/]",
        border_style="cyan",
        padding=(0, 1),
    )


async def run_scan_with_live_display(
    coordinator: ScanCoordinator,
    config: ScanConfiguration,
    console: Any,
    on_update: Callable[[ScanUpdate], None] | None = None,
) -> ScanSummary:
    """Drive a scan while refreshing a Rich Live progress panel."""
    state = ScanProgressState()

    with Live(
        create_scan_panel(state, config),
        console=console,
        refresh_per_second=4,
        transient=False,
    ) as live:
        async with aclosing(coordinator.run(config)) as updates:
            async for update in updates:
                state.apply(update)
                debug_host(update.host)
                if on_update:
                    on_update(update)
                live.update(create_scan_panel(state, config))

        state.complete = coordinator.state is ScanState.COMPLETED
        live.update(create_scan_panel(state, config))

    return coordinator.summary()


def _port_cell(host: HostResult) -> Text:
    text = Text()
    for index, item in enumerate(host.ports):
        if index:
            text.append(" ")
        label = f"{item.port}/{item.status.value}"
        if item.latency_ms is not None:
            label += f" ({item.latency_ms}ms)"
        text.append(label, style=STATUS_STYLES[item.status])
    return text


def create_results_table(hosts: list[HostResult]) -> Table:
    """Build the per-host result table."""
    table = Table(title="Scan Results", show_lines=False)
    table.add_column("IP", style="bold white", no_wrap=True)
    table.add_column("Responded", justify="center")
    table.add_column("Ports")

    for host in hosts:
        flag = "[green]yes[/]" if host.responded else "[dim]no[/]"
        table.add_row(host.ip, flag, _port_cell(host))
    return table


def print_summary(
    console: Any,
    summary: ScanSummary,
    results: ResultStore,
    show_all: bool = False,
) -> None:
    """Print the outcome message, the counters and the result table.

    Hosts are listed responded-first; hosts that did not respond are only
    shown with ``show_all``.
    """
    style = "green" if summary.state is ScanState.COMPLETED else "yellow"
    console.print(f"[{style}]{summary.message}[/{style}]")
    console.print(
        f"Hosts scanned: [bold]{results.total}[/]/{summary.progress.total}    "
        f"With open ports: [bold green]{results.responsive}[/]    "
        f"All ports timed out: [bold]{results.unresponsive}[/]"
    )

    hosts = [host for host in results.ordered() if show_all or host.responded]
    if hosts:
        console.print(create_results_table(hosts))
    else:
        console.print("[yellow]○[/] No responding hosts")
