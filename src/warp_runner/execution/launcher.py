"""Target launcher: runs a target as a child process and relays its exit code.

Architecture:

    .. code-block:: text

        Launcher.execute(target, args)
        ┌──────────────────────────────────────────────────────────────┐
        │ 1. POSIX only: ensure_executable(target)   (u+x, g+x)        │
        │ 2. plan():  select_strategy → build_argv → env overlay       │
        │ 3. runner(argv, env)   stdin/stdout/stderr inherited         │
        │ 4. block until exit    (no timeout)                          │
        │ 5. resolve_exit_code   code verbatim, no code → 1            │
        └──────────────────────────────────────────────────────────────┘

    .. mermaid::

        flowchart LR
            T[target + args] --> P{POSIX?}
            P -- yes --> N[ensure_executable]
            P -- no --> S[select_strategy]
            N --> S
            S --> A[build_argv]
            A --> R[runner: Popen + wait]
            R --> X[resolve_exit_code]

The child sees the launcher's environment plus one extra variable
(``WARP_EXEC_PATH`` by default) naming the launcher's own executable.

A non-zero exit from the child is returned, never raised. Only I/O
failures (permissions, spawn, wait, locating the launcher) raise, always as
a :class:`~warp_runner.core.errors.LauncherError` subclass.

Example:
    >>> from warp_runner.execution.launcher import execute
    >>> code = execute("/opt/app/payload", ["--port", "8080"])
    >>> raise SystemExit(code)
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Protocol

from warp_runner.core.environment import PlatformFamily, ProcessEnvironment
from warp_runner.core.errors import SpawnError, WaitError
from warp_runner.core.logging import ensure_logging, get_logger
from warp_runner.core.settings import LauncherSettings, get_settings
from warp_runner.execution.permissions import ensure_executable
from warp_runner.execution.strategy import ExecutionStrategy, build_argv, select_strategy

logger = get_logger(__name__)

# Exit code reported when the child terminated without one (killed by a signal).
ABNORMAL_EXIT_CODE = 1


# ---------------------------------------------------------------------------
# Launch plan
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LaunchPlan:
    """Everything needed to spawn the child, computed without side effects."""

    target: Path
    platform: PlatformFamily
    strategy: ExecutionStrategy
    argv: tuple[str, ...]
    env_overlay: Mapping[str, str] = field(default_factory=dict)

    @property
    def program(self) -> str:
        return self.argv[0]

    def to_dict(self) -> dict[str, Any]:
        """Serialize for ``plan --json`` and log records."""
        return {
            "target": str(self.target),
            "platform": self.platform.value,
            "strategy": self.strategy.value,
            "argv": list(self.argv),
            "env": dict(self.env_overlay),
        }


# ---------------------------------------------------------------------------
# Process runner
# ---------------------------------------------------------------------------

class ProcessRunner(Protocol):
    """Spawns ``argv`` with ``env``, waits, returns the raw return code."""

    def __call__(self, argv: Sequence[str], env: Mapping[str, str]) -> int | None: ...


def run_inherited(argv: Sequence[str], env: Mapping[str, str]) -> int | None:
    """Spawn with the parent's stdin/stdout/stderr and wait for exit.

    Returns ``Popen.returncode``: negative on POSIX when a signal ended
    the child.
    """
    try:
        process = subprocess.Popen(
            list(argv),
            stdin=None,
            stdout=None,
            stderr=None,
            env=dict(env),
        )
    except OSError as exc:
        raise SpawnError(
            f"Failed to start process: {argv[0]}", target=argv[0], cause=exc
        ) from exc

    try:
        return process.wait()
    except OSError as exc:
        raise WaitError(
            f"Failed waiting for process {process.pid}", target=argv[0], cause=exc
        ) from exc


def _spawnable(target: Path, platform: PlatformFamily) -> str:
    # execvp searches PATH for bare names; the target is a file, not a command.
    if platform.has_exec_bit and target.parent == Path(".") and not target.is_absolute():
        return os.path.join(os.curdir, str(target))
    return str(target)


def resolve_exit_code(returncode: int | None, platform: PlatformFamily) -> int:
    """Child's exit code, or :data:`ABNORMAL_EXIT_CODE` when it has none."""
    if returncode is None:
        return ABNORMAL_EXIT_CODE
    if platform is PlatformFamily.POSIX and returncode < 0:
        return ABNORMAL_EXIT_CODE
    return returncode


# ---------------------------------------------------------------------------
# Launcher
# ---------------------------------------------------------------------------

class Launcher:
    """Runs targets as child processes of the current process.

    Args:
        environment: Process facts (argv, environ, platform, launcher path).
            Defaults to the real current process.
        settings: Launcher settings. Defaults to :func:`get_settings`.
        runner: Spawns and waits on the child. Defaults to
            :func:`run_inherited`.
    """

    def __init__(
        self,
        *,
        environment: ProcessEnvironment | None = None,
        settings: LauncherSettings | None = None,
        runner: ProcessRunner | None = None,
    ) -> None:
        if environment is None:
            environment = ProcessEnvironment.from_current_process()
        self._environment = environment
        self._settings = settings if settings is not None else get_settings()
        self._runner = runner or run_inherited
        ensure_logging()

    @property
    def environment(self) -> ProcessEnvironment:
        return self._environment

    @property
    def settings(self) -> LauncherSettings:
        return self._settings

    def plan(
        self,
        target: str | PathLike[str],
        args: Sequence[str] | None = None,
        *,
        resolve_launcher: bool = True,
    ) -> LaunchPlan:
        """Build the launch plan for ``target`` without touching it.

        ``args`` defaults to the current process arguments minus the
        program name. With ``resolve_launcher=False`` the env overlay is
        left empty.
        """
        target = Path(target)
        forwarded = tuple(self._environment.args if args is None else args)
        platform = self._environment.platform

        strategy = select_strategy(target, platform)
        argv = build_argv(strategy, _spawnable(target, platform), forwarded, self._settings)

        overlay: dict[str, str] = {}
        if resolve_launcher:
            overlay[self._settings.exec_path_var] = str(self._environment.launcher_path())

        return LaunchPlan(
            target=target,
            platform=platform,
            strategy=strategy,
            argv=argv,
            env_overlay=overlay,
        )

    def execute(
        self,
        target: str | PathLike[str],
        args: Sequence[str] | None = None,
    ) -> int:
        """Run ``target`` and return its exit code.

        Raises:
            PermissionNormalizationError: POSIX target could not be made
                executable; nothing was spawned.
            EnvironmentQueryError: launcher path unavailable.
            SpawnError: child could not be started.
            WaitError: waiting on the child failed.
        """
        target = Path(target)
        logger.debug("launch.target", target=str(target))

        if self._environment.platform.has_exec_bit:
            ensure_executable(target)

        plan = self.plan(target, args)
        logger.debug("launch.plan", strategy=plan.strategy.value, argv=list(plan.argv))

        env = dict(self._environment.environ)
        env.update(plan.env_overlay)

        logger.info("launch.spawn", program=plan.program, strategy=plan.strategy.value)
        returncode = self._runner(plan.argv, env)

        exit_code = resolve_exit_code(returncode, plan.platform)
        logger.debug("launch.exit", returncode=returncode, exit_code=exit_code)
        return exit_code


def execute(
    target: str | PathLike[str],
    args: Sequence[str] | None = None,
    *,
    environment: ProcessEnvironment | None = None,
    settings: LauncherSettings | None = None,
) -> int:
    """Run ``target`` with ``args`` (default: ``sys.argv[1:]``) and return its exit code."""
    return Launcher(environment=environment, settings=settings).execute(target, args)


__all__ = [
    "ABNORMAL_EXIT_CODE",
    "LaunchPlan",
    "ProcessRunner",
    "run_inherited",
    "resolve_exit_code",
    "Launcher",
    "execute",
]
