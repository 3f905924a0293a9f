"""
warp-runner - cross-platform target launcher.

Runs an executable-like artifact as a child process with inherited
standard streams, injects ``WARP_EXEC_PATH`` into its environment, and
relays its exit code.

    >>> from warp_runner import execute
    >>> raise SystemExit(execute("/opt/app/payload"))
"""

__version__ = "0.1.0"

from warp_runner.core.environment import PlatformFamily, ProcessEnvironment
from warp_runner.core.errors import LauncherError
from warp_runner.execution import (
    ABNORMAL_EXIT_CODE,
    ExecutionStrategy,
    LaunchPlan,
    Launcher,
    ensure_executable,
    execute,
    select_strategy,
)

__all__ = [
    "__version__",
    "ABNORMAL_EXIT_CODE",
    "ExecutionStrategy",
    "LaunchPlan",
    "Launcher",
    "LauncherError",
    "PlatformFamily",
    "ProcessEnvironment",
    "ensure_executable",
    "execute",
    "select_strategy",
]
