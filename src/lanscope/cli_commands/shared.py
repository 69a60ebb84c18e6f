"""Shared CLI app objects."""

import typer
from rich.console import Console

app = typer.Typer(
    name="lanscope",
    help="Concurrent reachability scanner for IPv4 address ranges",
    no_args_is_help=True,
)
console = Console()
