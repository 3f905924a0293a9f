"""
Root Typer application for the warp-runner CLI.

    warp-runner run ./payload --port 8080     # launch, exit with child's code
    warp-runner plan ./setup.cmd --platform windows --json
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from pathlib import Path

import typer
from typer import Typer

from warp_runner.cli.utils import fail, output_plan
from warp_runner.core.environment import PlatformFamily, ProcessEnvironment
from warp_runner.core.errors import LauncherError
from warp_runner.core.logging import configure_logging
from warp_runner.execution.launcher import Launcher

app = Typer(
    name="warp-runner",
    help="warp-runner: run a target with inherited streams and relay its exit code.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

_PASSTHROUGH = {"allow_extra_args": True, "ignore_unknown_options": True}


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("warp-runner")
        except Exception:
            from warp_runner import __version__ as v
        typer.echo(f"warp-runner {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: LogLevel | None = typer.Option(
        None, "--log-level", case_sensitive=False, help="Default: WARP_RUNNER_LOG_LEVEL."
    ),
    log_format: LogFormat | None = typer.Option(
        None, "--log-format", case_sensitive=False, help="Default: WARP_RUNNER_LOG_FORMAT."
    ),
) -> None:
    """warp-runner CLI: launch targets and inspect how they would be launched."""
    configure_logging(
        level=log_level.value if log_level else None,  # type: ignore[arg-type]
        format=log_format.value if log_format else None,  # type: ignore[arg-type]
        force=True,
    )


# ── Commands ─────────────────────────────────────────────────────────────


@app.command("run", context_settings=_PASSTHROUGH, add_help_option=False)
def run(
    target: Path = typer.Argument(..., help="File to execute."),
    args: list[str] | None = typer.Argument(None, help="Arguments forwarded to the target."),
) -> None:
    """Run TARGET and exit with its exit code.

    Every argument after TARGET, ``--help`` included, is forwarded to it.
    """
    launcher = Launcher()
    try:
        code = launcher.execute(target, list(args or []))
    except LauncherError as exc:
        raise fail(exc) from exc
    raise typer.Exit(code=code)


@app.command("plan", context_settings=_PASSTHROUGH)
def plan(
    target: Path = typer.Argument(..., help="File that would be executed."),
    args: list[str] | None = typer.Argument(None, help="Arguments that would be forwarded."),
    platform: PlatformFamily | None = typer.Option(
        None, "--platform", "-p", help="Plan for this platform family instead of the host's."
    ),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show how TARGET would be launched, without touching it."""
    environment = ProcessEnvironment.from_current_process()
    if platform is not None:
        environment = dataclasses.replace(environment, platform=platform)

    try:
        launch_plan = Launcher(environment=environment).plan(target, list(args or []))
    except LauncherError as exc:
        raise fail(exc) from exc
    output_plan(launch_plan, as_json=json_out)
