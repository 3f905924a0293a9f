"""Execution strategy selection.

Decides how a target gets invoked and what the child's argument vector
looks like. Everything here is pure: no filesystem access, no process
state, so the same target and platform always produce the same answer.

Routing table (Windows only; POSIX always uses direct exec):

    .. code-block:: text

        extension (lower-cased)  │ strategy               │ argv
        ─────────────────────────┼────────────────────────┼──────────────────────────────
        bat, cmd                 │ COMMAND_SHELL_SCRIPT   │ cmd /c <target> args...
        vbs                      │ SCRIPT_HOST_SCRIPT     │ wscript /nologo <target> args...
        anything else / none     │ DIRECT_EXEC            │ <target> args...

Rules are checked in order and the first match wins.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from os import PathLike
from pathlib import PurePath

from warp_runner.core.environment import PlatformFamily
from warp_runner.core.settings import LauncherSettings


class ExecutionStrategy(str, Enum):
    """How a target is handed to the operating system."""

    DIRECT_EXEC = "direct_exec"
    COMMAND_SHELL_SCRIPT = "command_shell_script"
    SCRIPT_HOST_SCRIPT = "script_host_script"


COMMAND_SHELL_EXTENSIONS: frozenset[str] = frozenset({"bat", "cmd"})
SCRIPT_HOST_EXTENSIONS: frozenset[str] = frozenset({"vbs"})

EXTENSION_ROUTES: tuple[tuple[frozenset[str], ExecutionStrategy], ...] = (
    (COMMAND_SHELL_EXTENSIONS, ExecutionStrategy.COMMAND_SHELL_SCRIPT),
    (SCRIPT_HOST_EXTENSIONS, ExecutionStrategy.SCRIPT_HOST_SCRIPT),
)


def target_extension(target: str | PathLike[str]) -> str:
    """Lower-cased extension without the dot; ``""`` when there is none.

    Dotfiles such as ``.profile`` have no extension.
    """
    name = PurePath(target).name
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return ""
    return ext.lower()


def select_strategy(
    target: str | PathLike[str],
    platform: PlatformFamily,
) -> ExecutionStrategy:
    """Pick the strategy for ``target`` on ``platform``."""
    if platform.has_exec_bit:
        return ExecutionStrategy.DIRECT_EXEC

    ext = target_extension(target)
    for extensions, strategy in EXTENSION_ROUTES:
        if ext in extensions:
            return strategy
    return ExecutionStrategy.DIRECT_EXEC


def build_argv(
    strategy: ExecutionStrategy,
    target: str | PathLike[str],
    args: Sequence[str],
    settings: LauncherSettings,
) -> tuple[str, ...]:
    """Child argument vector for ``strategy``; ``args`` are kept in order."""
    target_str = str(target)
    if strategy is ExecutionStrategy.COMMAND_SHELL_SCRIPT:
        return (settings.command_shell, "/c", target_str, *args)
    if strategy is ExecutionStrategy.SCRIPT_HOST_SCRIPT:
        return (settings.script_host, "/nologo", target_str, *args)
    return (target_str, *args)


__all__ = [
    "ExecutionStrategy",
    "COMMAND_SHELL_EXTENSIONS",
    "SCRIPT_HOST_EXTENSIONS",
    "EXTENSION_ROUTES",
    "target_extension",
    "select_strategy",
    "build_argv",
]
