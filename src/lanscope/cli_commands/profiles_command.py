"""Port profile listing command."""

from rich.table import Table

from lanscope.modules.scan import DEFAULT_PORTS, PORT_PROFILES

from .shared import app, console


@app.command()
def profiles() -> None:
    """List the built-in port profiles."""
    table = Table(title="Port Profiles")
    table.add_column("Name", style="bold cyan")
    table.add_column("Description")
    table.add_column("Ports", style="green")

    for name, (description, ports) in PORT_PROFILES.items():
        table.add_row(name, description, ", ".join(str(port) for port in ports))

    console.print(table)
    console.print(f"[dim]Default ports: {DEFAULT_PORTS}[/dim]")
