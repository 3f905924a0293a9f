"""
Launcher settings backed by pydantic-settings.

All fields can be set through ``WARP_RUNNER_*`` environment variables
(e.g. ``WARP_RUNNER_LOG_LEVEL=DEBUG``) or a ``.env`` file in the working
directory.

Fields
──────
exec_path_var : Name of the variable injected into the child's environment
command_shell : Command interpreter used for ``.bat`` / ``.cmd`` targets
script_host   : Script host used for ``.vbs`` targets
log_level     : Structlog log level
log_format    : ``console`` or ``json``
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_EXEC_PATH_VAR = "WARP_EXEC_PATH"


class LauncherSettings(BaseSettings):
    """Configuration for a launcher process."""

    model_config = SettingsConfigDict(
        env_prefix="WARP_RUNNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Child environment ────────────────────────────────────────
    exec_path_var: str = Field(
        default=DEFAULT_EXEC_PATH_VAR,
        description="Environment variable holding the launcher's own executable path",
    )

    # ── Interpreter hosts (Windows) ──────────────────────────────
    command_shell: str = Field(default="cmd", description="Host for batch scripts")
    script_host: str = Field(default="wscript", description="Host for VBScript files")

    # ── Observability ────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_format: Literal["console", "json"] = "console"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def _lower_format(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value

    @field_validator("exec_path_var", "command_shell", "script_host")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, LauncherSettings] = {}


def get_settings(*, _force_reload: bool = False) -> LauncherSettings:
    """Load, validate, and cache a :class:`LauncherSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    settings = LauncherSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()


__all__ = [
    "DEFAULT_EXEC_PATH_VAR",
    "LauncherSettings",
    "get_settings",
    "clear_settings_cache",
]
