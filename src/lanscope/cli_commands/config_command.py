"""Configuration CLI command."""

import typer

from .deps import cli_module
from .shared import app, console


@app.command()
def config(
    action: str = typer.Argument("show", help="Action: show, init"),
) -> None:
    """Show effective settings or create the global config file."""
    cli = cli_module()

    if action == "init":
        config_path = cli.create_global_config()
        console.print(f"[green]Global config:[/green] {config_path}")
        return

    if action == "show":
        console.print("[bold]Effective Configuration:[/bold]")
        console.print(f"  LANSCOPE_TIMEOUT_MS={cli.get_timeout_ms()}")
        console.print(f"  LANSCOPE_CONCURRENCY={cli.get_concurrency()}")
        console.print(f"  LANSCOPE_PORTS={cli.get_default_ports()}")
        console.print(f"  LANSCOPE_VERBOSE={str(cli.is_verbose()).lower()}")

        config_path = cli.global_config_path()
        if config_path.exists():
            console.print(f"[dim]Global config: {config_path}[/dim]")
        else:
            console.print("[dim]No global config found. Run 'lanscope config init'.[/dim]")
        return

    console.print(f"[red]Unknown action: {action}. Use 'show' or 'init'.[/red]")
    raise typer.Exit(1)
