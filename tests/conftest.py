"""
Shared pytest fixtures for warp-runner tests.

This module provides:
- Settings cache isolation
- Fabricated process environments for both platform families
- A recording process runner that never spawns anything
- A factory for small shell-script targets with a chosen mode
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

import pytest

# Ensure warp_runner package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from warp_runner.core.environment import PlatformFamily, ProcessEnvironment
from warp_runner.core.logging import reset_logging
from warp_runner.core.settings import LauncherSettings, clear_settings_cache

LAUNCHER_PATH = Path("/opt/warp/bin/warp-runner")


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch):
    for key in list(os.environ):
        if key.startswith("WARP_RUNNER_"):
            monkeypatch.delenv(key)
    clear_settings_cache()
    yield
    clear_settings_cache()
    reset_logging()


@pytest.fixture
def settings() -> LauncherSettings:
    return LauncherSettings()


class RecordingRunner:
    """Process runner that records what it would have spawned."""

    def __init__(self, returncode: int | None = 0) -> None:
        self.returncode = returncode
        self.calls: list[tuple[tuple[str, ...], dict[str, str]]] = []

    def __call__(self, argv: Sequence[str], env: Mapping[str, str]) -> int | None:
        self.calls.append((tuple(argv), dict(env)))
        return self.returncode

    @property
    def argv(self) -> tuple[str, ...]:
        return self.calls[-1][0]

    @property
    def env(self) -> dict[str, str]:
        return self.calls[-1][1]


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def windows_env() -> ProcessEnvironment:
    return ProcessEnvironment(
        argv=("warp-runner",),
        environ={"PATH": r"C:\Windows\System32", "HOME": r"C:\Users\dev"},
        platform=PlatformFamily.WINDOWS,
        executable=LAUNCHER_PATH,
    )


@pytest.fixture
def posix_env() -> ProcessEnvironment:
    return ProcessEnvironment(
        argv=("warp-runner",),
        environ=dict(os.environ),
        platform=PlatformFamily.POSIX,
        executable=LAUNCHER_PATH,
    )


@pytest.fixture
def make_script(tmp_path: Path):
    """Write ``/bin/sh`` body to ``tmp_path / name`` with ``mode``."""

    def _make(name: str, body: str, mode: int = 0o644) -> Path:
        path = tmp_path / name
        path.write_text(f"#!/bin/sh\n{body}\n")
        os.chmod(path, mode)
        return path

    return _make
