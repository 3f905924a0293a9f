"""
Structured error types for warp-runner.

Every failure the launcher can hit before or while running a target is an
I/O-level problem: the target's metadata cannot be read, its permissions
cannot be changed, the child cannot be spawned, or waiting on it fails.
Each of those surfaces as a :class:`LauncherError` subclass carrying a
category, the target path, and the chained ``OSError``.

A child that exits non-zero, or dies from a signal, is NOT an error. The
launcher relays an exit status; it does not judge it.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                     LauncherError                         │
        │           (category, target, cause, to_dict())            │
        ├──────────────────────────────────────────────────────────┤
        │  PermissionNormalizationError   PERMISSION               │
        │  SpawnError                     SPAWN                    │
        │  WaitError                      WAIT                     │
        │  EnvironmentQueryError          ENVIRONMENT              │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> try:
    ...     os.chmod("/read-only/payload", 0o754)
    ... except OSError as exc:
    ...     raise PermissionNormalizationError(
    ...         "Cannot mark target executable", target="/read-only/payload", cause=exc
    ...     ) from exc

Tags:
    error-handling, exception-hierarchy, launcher, warp-runner

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from enum import Enum
from os import PathLike
from typing import Any


class LaunchErrorCategory(str, Enum):
    """Which stage of a launch failed.

    The launcher itself never branches on the category; it only shapes
    the diagnostic message and the structured log record.
    """

    PERMISSION = "PERMISSION"
    SPAWN = "SPAWN"
    WAIT = "WAIT"
    ENVIRONMENT = "ENVIRONMENT"


class LauncherError(Exception):
    """Base class for all launch failures.

    All launcher errors are fatal to the invocation and never retryable.

    Attributes:
        message: Human-readable description
        category: Stage that failed
        target: Target path involved, if any
        cause: Underlying exception (usually an ``OSError``)
    """

    default_category: LaunchErrorCategory = LaunchErrorCategory.SPAWN

    def __init__(
        self,
        message: str,
        *,
        category: LaunchErrorCategory | None = None,
        target: str | PathLike[str] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.target = str(target) if target is not None else None
        self.cause = cause

    @property
    def retryable(self) -> bool:
        return False

    @property
    def errno(self) -> int | None:
        """``errno`` of the underlying ``OSError``, when there is one."""
        return getattr(self.cause, "errno", None)

    def __str__(self) -> str:
        parts = [f"[{self.category.value}] {self.message}"]
        if self.target:
            parts.append(f"(target: {self.target})")
        if self.cause is not None:
            parts.append(f"caused by {type(self.cause).__name__}: {self.cause}")
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, category={self.category.value})"

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging."""
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        if self.target:
            result["target"] = self.target
        if self.cause is not None:
            result["cause"] = str(self.cause)
            result["cause_type"] = type(self.cause).__name__
        if self.errno is not None:
            result["errno"] = self.errno
        return result


class PermissionNormalizationError(LauncherError):
    """Target metadata could not be read or its mode could not be changed."""

    default_category = LaunchErrorCategory.PERMISSION


class SpawnError(LauncherError):
    """The child process could not be started."""

    default_category = LaunchErrorCategory.SPAWN


class WaitError(LauncherError):
    """Waiting for the child process to terminate failed."""

    default_category = LaunchErrorCategory.WAIT


class EnvironmentQueryError(LauncherError):
    """The launcher could not determine its own executable path."""

    default_category = LaunchErrorCategory.ENVIRONMENT


__all__ = [
    "LaunchErrorCategory",
    "LauncherError",
    "PermissionNormalizationError",
    "SpawnError",
    "WaitError",
    "EnvironmentQueryError",
]
