"""
Core primitives for warp-runner: errors, settings, logging, and the
process environment capability.
"""

from warp_runner.core.environment import PlatformFamily, ProcessEnvironment
from warp_runner.core.errors import (
    EnvironmentQueryError,
    LaunchErrorCategory,
    LauncherError,
    PermissionNormalizationError,
    SpawnError,
    WaitError,
)
from warp_runner.core.logging import configure_logging, get_logger
from warp_runner.core.settings import LauncherSettings, clear_settings_cache, get_settings

__all__ = [
    # environment
    "PlatformFamily",
    "ProcessEnvironment",
    # errors
    "LaunchErrorCategory",
    "LauncherError",
    "PermissionNormalizationError",
    "SpawnError",
    "WaitError",
    "EnvironmentQueryError",
    # logging
    "configure_logging",
    "get_logger",
    # settings
    "LauncherSettings",
    "get_settings",
    "clear_settings_cache",
]
