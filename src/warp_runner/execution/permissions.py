"""Permission normalization for POSIX targets.

Payloads extracted from archives routinely lose their execute bits. Before
a target is exec'd, the owner and group execute bits are switched on; the
world execute bit is left exactly as it was.
"""

from __future__ import annotations

import os
import stat
from os import PathLike

from warp_runner.core.errors import PermissionNormalizationError
from warp_runner.core.logging import ensure_logging, get_logger

logger = get_logger(__name__)


def add_exec_permission(
    path: str | PathLike[str],
    *,
    user: bool = True,
    group: bool = True,
    other: bool = False,
) -> int:
    """OR execute bits into ``path``'s mode and write it back.

    Existing bits are never cleared. Returns the new permission bits.

    Raises:
        PermissionNormalizationError: metadata unreadable or chmod rejected.
    """
    try:
        mode = stat.S_IMODE(os.stat(path).st_mode)
    except OSError as exc:
        raise PermissionNormalizationError(
            "Cannot read target metadata", target=path, cause=exc
        ) from exc

    new_mode = mode
    if user:
        new_mode |= stat.S_IXUSR
    if group:
        new_mode |= stat.S_IXGRP
    if other:
        new_mode |= stat.S_IXOTH

    try:
        os.chmod(path, new_mode)
    except OSError as exc:
        raise PermissionNormalizationError(
            "Cannot mark target executable", target=path, cause=exc
        ) from exc

    ensure_logging()
    logger.debug("permissions.normalized", target=str(path), old_mode=oct(mode), new_mode=oct(new_mode))
    return new_mode


def ensure_executable(target: str | PathLike[str]) -> None:
    """Make ``target`` executable by its owner and group."""
    add_exec_permission(target, user=True, group=True, other=False)


__all__ = ["add_exec_permission", "ensure_executable"]
