"""
Logging configuration.

Provides a single entry point for configuring structured logging.
All records go to **stderr**: the child inherits the launcher's stdout and
anything the launcher wrote there would interleave with the target's own
output.

Configuration is read from :class:`~warp_runner.core.settings.LauncherSettings`
unless passed explicitly:
- WARP_RUNNER_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: WARNING)
- WARP_RUNNER_LOG_FORMAT: json | console (default: console)

Usage:
    from warp_runner.core.logging import configure_logging, get_logger
    configure_logging(level="DEBUG")
    logger = get_logger(__name__)
    logger.debug("launch.target", target="/opt/app/payload")
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Literal

import structlog
from structlog.types import Processor

# Track if logging has been configured
_configured = False


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None,
    format: Literal["json", "console"] | None = None,
    force: bool = False,
) -> None:
    """
    Configure structured logging for the launcher.

    Should be called once at startup (CLI entry). Subsequent calls are
    no-ops unless force=True.

    Args:
        level: Log level (overrides WARP_RUNNER_LOG_LEVEL)
        format: Output format (overrides WARP_RUNNER_LOG_FORMAT)
        force: Reconfigure even if already configured
    """
    global _configured

    if _configured and not force:
        return

    if level is None or format is None:
        from warp_runner.core.settings import get_settings

        settings = get_settings()
        level = level or settings.log_level
        format = format or settings.log_format

    log_level = getattr(logging, level.upper())

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    _configured = True


def ensure_logging() -> None:
    """Configure from settings unless the launcher or the host application already did.

    Library callers that never call :func:`configure_logging` would otherwise
    get structlog's defaults, which print every level to stdout.
    """
    if _configured or structlog.is_configured():
        return
    configure_logging()


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger bound to ``name`` (usually ``__name__``)."""
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()


def reset_logging() -> None:
    """Forget the current configuration (primarily for testing)."""
    global _configured
    structlog.reset_defaults()
    _configured = False


__all__ = [
    "configure_logging",
    "ensure_logging",
    "get_logger",
    "reset_logging",
]
