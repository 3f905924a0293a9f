"""
Tests for the logging module.

Tests verify:
- Records go to stderr, never stdout
- JSON format renders parseable lines
- DEBUG records are suppressed at WARNING level
- ensure_logging leaves an existing configuration alone
"""

import json

import structlog

from warp_runner.core.logging import configure_logging, ensure_logging, get_logger


class TestConfigureLogging:
    def test_json_to_stderr(self, capsys):
        configure_logging(level="INFO", format="json", force=True)
        get_logger("warp_runner.test").info("launch.spawn", program="cmd")

        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert record["event"] == "launch.spawn"
        assert record["program"] == "cmd"
        assert record["level"] == "info"
        assert record["logger_name"] == "warp_runner.test"
        assert "timestamp" in record

    def test_debug_suppressed_at_warning(self, capsys):
        configure_logging(level="WARNING", format="json", force=True)
        logger = get_logger("warp_runner.test")
        logger.debug("launch.plan")
        logger.warning("launch.slow")

        err = capsys.readouterr().err
        assert "launch.plan" not in err
        assert "launch.slow" in err

    def test_console_format(self, capsys):
        configure_logging(level="DEBUG", format="console", force=True)
        get_logger("warp_runner.test").debug("launch.target", target="payload")
        assert "launch.target" in capsys.readouterr().err

    def test_second_call_is_noop(self, capsys):
        configure_logging(level="ERROR", format="json", force=True)
        configure_logging(level="DEBUG", format="json")
        get_logger("warp_runner.test").info("launch.spawn")
        assert "launch.spawn" not in capsys.readouterr().err

    def test_settings_supply_defaults(self, capsys, monkeypatch):
        monkeypatch.setenv("WARP_RUNNER_LOG_LEVEL", "INFO")
        monkeypatch.setenv("WARP_RUNNER_LOG_FORMAT", "json")
        configure_logging(force=True)
        get_logger("warp_runner.test").info("launch.spawn")
        assert json.loads(capsys.readouterr().err.strip())["event"] == "launch.spawn"


class TestGetLogger:
    def test_module_logger_picks_up_later_configuration(self, capsys):
        logger = get_logger("warp_runner.early")
        configure_logging(level="INFO", format="json", force=True)
        logger.info("after.configure")
        assert "after.configure" in capsys.readouterr().err


class TestEnsureLogging:
    def test_defaults_to_stderr_at_warning(self, capsys):
        ensure_logging()
        logger = get_logger("warp_runner.test")
        logger.info("launch.spawn")
        logger.warning("launch.slow")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "launch.spawn" not in captured.err
        assert "launch.slow" in captured.err

    def test_keeps_host_configuration(self):
        processors = [structlog.processors.JSONRenderer()]
        structlog.configure(processors=processors)
        ensure_logging()
        assert structlog.get_config()["processors"] == processors

    def test_keeps_launcher_configuration(self, capsys):
        configure_logging(level="DEBUG", format="json", force=True)
        ensure_logging()
        get_logger("warp_runner.test").debug("launch.plan")
        assert "launch.plan" in capsys.readouterr().err
