"""
Process environment capability.

The launcher needs three facts about the process it runs in: its own
command-line arguments, its own executable path, and the platform family.
Rather than reading ``sys.argv`` / ``sys.executable`` / ``os.name`` deep
inside the dispatcher, they are gathered once into a
:class:`ProcessEnvironment` and passed in, so the launcher can be driven
from tests with a fabricated environment.

Example:
    >>> env = ProcessEnvironment.from_current_process()
    >>> env.args           # sys.argv[1:]
    >>> env.launcher_path()

    >>> fake = ProcessEnvironment(
    ...     argv=("warp-runner", "--flag"),
    ...     environ={"PATH": "/usr/bin"},
    ...     platform=PlatformFamily.WINDOWS,
    ...     executable=Path("C:/tools/warp-runner.exe"),
    ... )
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from warp_runner.core.errors import EnvironmentQueryError


class PlatformFamily(str, Enum):
    """Host platform family; decides how a target is invoked."""

    POSIX = "posix"
    WINDOWS = "windows"

    @classmethod
    def current(cls) -> PlatformFamily:
        return cls.WINDOWS if os.name == "nt" else cls.POSIX

    @property
    def has_exec_bit(self) -> bool:
        """Whether files carry a POSIX executable permission bit."""
        return self is PlatformFamily.POSIX


def current_executable() -> Path:
    """Absolute path of the running launcher.

    Frozen builds (PyInstaller and friends) report the bundle through
    ``sys.executable``. Otherwise the entry script in ``sys.argv[0]`` is the
    launcher (the ``warp-runner`` console script or ``__main__.py``); when it
    does not name a real file (``python -c``) the interpreter is used.
    """
    candidate = ""
    if not getattr(sys, "frozen", False) and sys.argv and sys.argv[0]:
        if os.path.isfile(sys.argv[0]):
            candidate = sys.argv[0]
    candidate = candidate or sys.executable

    if not candidate:
        raise EnvironmentQueryError("Cannot determine the launcher executable path")

    try:
        return Path(candidate).resolve(strict=True)
    except OSError as exc:
        raise EnvironmentQueryError(
            "Cannot resolve the launcher executable path",
            target=candidate,
            cause=exc,
        ) from exc


@dataclass(frozen=True)
class ProcessEnvironment:
    """Snapshot of what the launcher knows about its own process.

    Attributes:
        argv: Full argument vector, program name first
        environ: Environment inherited by the child
        platform: Host platform family
        executable: Launcher path; resolved from the real process when None
    """

    argv: tuple[str, ...] = ()
    environ: Mapping[str, str] = field(default_factory=dict)
    platform: PlatformFamily = field(default_factory=PlatformFamily.current)
    executable: Path | None = None

    @classmethod
    def from_current_process(
        cls,
        argv: Sequence[str] | None = None,
    ) -> ProcessEnvironment:
        return cls(
            argv=tuple(sys.argv if argv is None else argv),
            environ=dict(os.environ),
            platform=PlatformFamily.current(),
        )

    @property
    def args(self) -> tuple[str, ...]:
        """Arguments minus the invoking program name."""
        return self.argv[1:]

    def launcher_path(self) -> Path:
        if self.executable is not None:
            return self.executable
        return current_executable()


__all__ = [
    "PlatformFamily",
    "ProcessEnvironment",
    "current_executable",
]
