"""
CLI utility helpers: output formatting and error reporting.

Everything is printed on stderr except ``plan`` output: during ``run`` the
child owns stdout.
"""

from __future__ import annotations

import json

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from warp_runner.core.errors import LauncherError
from warp_runner.execution.launcher import LaunchPlan

# Exit code of the launcher itself when the launch fails before the child
# produced one.
LAUNCH_FAILURE_EXIT_CODE = 1

console = Console()
err_console = Console(stderr=True)


def fail(error: LauncherError) -> typer.Exit:
    """Report ``error`` on stderr and build the matching ``typer.Exit``."""
    err_console.print(f"[bold red]Error[/bold red] ({error.category.value}): {escape(error.message)}")
    if error.target:
        err_console.print(f"  [cyan]target[/cyan]: {escape(error.target)}")
    if error.cause is not None:
        err_console.print(f"  [cyan]cause[/cyan]: {escape(str(error.cause))}")
    return typer.Exit(code=LAUNCH_FAILURE_EXIT_CODE)


def output_plan(plan: LaunchPlan, *, as_json: bool = False) -> None:
    """Render a ``LaunchPlan`` to the terminal."""
    if as_json:
        console.print_json(json.dumps(plan.to_dict(), default=str))
        return

    table = Table(title="Launch plan", show_header=False, pad_edge=False)
    table.add_column("field", style="cyan")
    table.add_column("value", overflow="fold")
    table.add_row("target", escape(str(plan.target)))
    table.add_row("platform", plan.platform.value)
    table.add_row("strategy", plan.strategy.value)
    table.add_row("argv", escape(" ".join(plan.argv)))
    for key, value in plan.env_overlay.items():
        table.add_row(f"env {key}", escape(value))
    console.print(table)
