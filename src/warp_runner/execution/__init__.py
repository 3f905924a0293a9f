"""Target execution: permission normalization, strategy selection, launching.

Architecture:

    .. code-block:: text

        warp_runner.execution
        ├── __init__.py     ← Public API (this file)
        ├── permissions.py  ← ensure_executable / add_exec_permission (POSIX)
        ├── strategy.py     ← ExecutionStrategy + routing table + argv builder
        └── launcher.py     ← Launcher, LaunchPlan, exit code resolution
"""

from warp_runner.execution.launcher import (
    ABNORMAL_EXIT_CODE,
    LaunchPlan,
    Launcher,
    ProcessRunner,
    execute,
    resolve_exit_code,
    run_inherited,
)
from warp_runner.execution.permissions import add_exec_permission, ensure_executable
from warp_runner.execution.strategy import (
    ExecutionStrategy,
    build_argv,
    select_strategy,
    target_extension,
)

__all__ = [
    # launcher
    "ABNORMAL_EXIT_CODE",
    "LaunchPlan",
    "Launcher",
    "ProcessRunner",
    "execute",
    "resolve_exit_code",
    "run_inherited",
    # permissions
    "add_exec_permission",
    "ensure_executable",
    # strategy
    "ExecutionStrategy",
    "build_argv",
    "select_strategy",
    "target_extension",
]
