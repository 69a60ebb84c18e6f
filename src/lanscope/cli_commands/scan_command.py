"""Scan CLI command entrypoint."""

from pathlib import Path

import typer

from lanscope.modules.scan import ScanConfiguration, ScanValidationError
from lanscope.utils.debug import debug_scan_config, set_debug_enabled

from .deps import cli_module
from .scan_display import print_summary, run_scan_with_live_display
from .scan_helpers import coerce_positive_int, merge_port_input, normalize_verbose
from .shared import app, console


@app.command()
def scan(
    start: str = typer.Argument(..., help="First IPv4 address of the range"),
    end: str | None = typer.Argument(None, help="Last IPv4 address (defaults to START)"),
    ports: str | None = typer.Option(
        None,
        "--ports",
        "-p",
        help="Ports separated by commas or spaces (default: LANSCOPE_PORTS)",
    ),
    profile: list[str] | None = typer.Option(
        None,
        "--profile",
        "-P",
        help="Add a port profile: web, admin, sharing, iot (repeatable)",
    ),
    timeout: int | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Per-probe timeout in milliseconds (minimum 200)",
    ),
    concurrency: int | None = typer.Option(
        None,
        "--concurrency",
        "-c",
        help="Hosts scanned in parallel (1-128)",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write results as CSV to this file or directory",
    ),
    show_all: bool = typer.Option(False, "--all", help="Also list hosts that did not respond"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print per-host details"),
) -> None:
    """Probe every address of a range on the selected ports."""
    cli = cli_module()
    effective_verbose = normalize_verbose(verbose) or cli.is_verbose()

    try:
        if ports is None and profile:
            ports = ""
        ports_text = merge_port_input(
            ports if ports is not None else cli.get_default_ports(),
            profile,
        )
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc

    config = ScanConfiguration.from_input(
        start,
        end or start,
        ports_text,
        timeout_ms=coerce_positive_int(timeout, cli.get_timeout_ms()),
        concurrency=coerce_positive_int(concurrency, cli.get_concurrency()),
    )
    set_debug_enabled(effective_verbose)
    debug_scan_config(config)

    active: dict[str, object] = {}

    def request_cancel() -> None:
        coordinator = active.get("coordinator")
        if coordinator is not None:
            console.print("[yellow]Cancelling scan...[/yellow]")
            coordinator.cancel()

    async def run_scan():
        async with cli.HTTPProbeTransport() as transport:
            coordinator = cli.ScanCoordinator(transport)
            coordinator.validate(config)
            active["coordinator"] = coordinator
            summary = await run_scan_with_live_display(coordinator, config, console)
            return coordinator, summary

    try:
        coordinator, summary = cli.safe_async_run(run_scan(), on_interrupt=request_cancel)
    except ScanValidationError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc
    except KeyboardInterrupt as exc:
        console.print("[red]Scan aborted.[/red]")
        raise typer.Exit(130) from exc

    print_summary(console, summary, coordinator.results, show_all=show_all)

    if output is not None:
        if not summary.hosts:
            console.print("[yellow]No results to export.[/yellow]")
            return
        try:
            report_file = cli.write_csv_report(summary.hosts, output)
        except OSError as exc:
            console.print(f"[red]Could not write CSV: {exc}[/red]")
            raise typer.Exit(1) from exc
        console.print(f"[green]CSV written:[/green] {report_file}")
