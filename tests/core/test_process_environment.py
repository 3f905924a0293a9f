"""Tests for the process environment capability."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from warp_runner.core.environment import (
    PlatformFamily,
    ProcessEnvironment,
    current_executable,
)
from warp_runner.core.errors import EnvironmentQueryError


class TestPlatformFamily:
    def test_current_windows(self):
        with patch("warp_runner.core.environment.os.name", "nt"):
            assert PlatformFamily.current() is PlatformFamily.WINDOWS

    def test_current_posix(self):
        with patch("warp_runner.core.environment.os.name", "posix"):
            assert PlatformFamily.current() is PlatformFamily.POSIX

    def test_exec_bit(self):
        assert PlatformFamily.POSIX.has_exec_bit
        assert not PlatformFamily.WINDOWS.has_exec_bit


class TestProcessEnvironment:
    def test_args_skip_program_name(self):
        env = ProcessEnvironment(argv=("warp-runner", "a", "--b"))
        assert env.args == ("a", "--b")

    def test_args_empty(self):
        assert ProcessEnvironment().args == ()

    def test_from_current_process(self, monkeypatch):
        monkeypatch.setenv("WARP_TEST_MARKER", "1")
        env = ProcessEnvironment.from_current_process(argv=["prog", "x"])
        assert env.args == ("x",)
        assert env.environ["WARP_TEST_MARKER"] == "1"
        assert env.platform is PlatformFamily.current()

    def test_environ_is_a_snapshot(self, monkeypatch):
        env = ProcessEnvironment.from_current_process(argv=["prog"])
        monkeypatch.setenv("WARP_TEST_LATE", "1")
        assert "WARP_TEST_LATE" not in env.environ

    def test_injected_executable(self):
        env = ProcessEnvironment(executable=Path("/opt/warp/bin/warp-runner"))
        assert env.launcher_path() == Path("/opt/warp/bin/warp-runner")


class TestCurrentExecutable:
    def test_entry_script(self, tmp_path, monkeypatch):
        script = tmp_path / "warp-runner"
        script.write_text("")
        monkeypatch.setattr(sys, "argv", [str(script)])
        assert current_executable() == script.resolve()

    def test_falls_back_to_interpreter(self, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["-c"])
        assert current_executable() == Path(sys.executable).resolve()

    def test_frozen_uses_executable(self, tmp_path, monkeypatch):
        script = tmp_path / "entry.py"
        script.write_text("")
        monkeypatch.setattr(sys, "argv", [str(script)])
        monkeypatch.setattr(sys, "frozen", True, raising=False)
        assert current_executable() == Path(sys.executable).resolve()

    def test_unresolvable(self, monkeypatch):
        monkeypatch.setattr(sys, "argv", [])
        monkeypatch.setattr(sys, "executable", "")
        with pytest.raises(EnvironmentQueryError):
            current_executable()

    def test_launcher_path_delegates(self, tmp_path, monkeypatch):
        script = tmp_path / "warp-runner"
        script.write_text("")
        monkeypatch.setattr(sys, "argv", [str(script)])
        assert ProcessEnvironment().launcher_path() == script.resolve()
