"""
Tests for observability — logging setup and level resolution.
"""

import logging
from pathlib import Path

from click.testing import CliRunner

from slimlibs.core.observability.logging_config import (
    PACKAGE_LOGGER,
    configure_cli_logging,
    parse_level,
    resolve_level,
    setup_logging,
)
from slimlibs.main import cli


class TestParseLevel:
    def test_names(self):
        assert parse_level("debug") == logging.DEBUG
        assert parse_level(" INFO ") == logging.INFO

    def test_fallback(self):
        assert parse_level(None) == logging.WARNING
        assert parse_level("") == logging.WARNING
        assert parse_level("chatty") == logging.WARNING


class TestResolveLevel:
    def test_flags_in_order(self):
        assert resolve_level(debug=True, quiet=True, environ={}) == logging.DEBUG
        assert resolve_level(verbose=True, quiet=True, environ={}) == logging.INFO
        assert resolve_level(quiet=True, environ={}) == logging.ERROR

    def test_flag_beats_env(self):
        env = {"SLIMLIBS_LOG_LEVEL": "ERROR"}
        assert resolve_level(verbose=True, environ=env) == logging.INFO

    def test_env_then_default(self):
        assert resolve_level(environ={"SLIMLIBS_LOG_LEVEL": "info"}) == logging.INFO
        assert resolve_level(environ={}) == logging.WARNING


class TestSetupLogging:
    def test_configures_package_logger_only(self):
        root = logging.getLogger()
        root_handlers = root.handlers[:]

        pkg = setup_logging(logging.INFO)

        assert pkg.name == PACKAGE_LOGGER
        assert pkg.level == logging.INFO
        assert len(pkg.handlers) == 1
        assert pkg.propagate is False
        assert root.handlers == root_handlers

    def test_replaces_handlers(self):
        setup_logging(logging.INFO)
        pkg = setup_logging(logging.WARNING)
        assert len(pkg.handlers) == 1

    def test_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "slimlibs.log"
        pkg = setup_logging(logging.WARNING, log_file=str(log_file), log_file_level=logging.DEBUG)
        assert pkg.level == logging.DEBUG
        assert len(pkg.handlers) == 2

        logging.getLogger("slimlibs.core.services.matcher").debug("hello file")
        for handler in pkg.handlers:
            handler.flush()
        assert "hello file" in log_file.read_text()


class TestConfigureCLILogging:
    def test_file_from_env(self, tmp_path: Path):
        log_file = tmp_path / "audit.log"
        env = {"SLIMLIBS_LOG_FILE": str(log_file), "SLIMLIBS_LOG_FILE_LEVEL": "DEBUG"}

        pkg = configure_cli_logging(environ=env)

        assert pkg.level == logging.DEBUG
        file_handlers = [h for h in pkg.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].level == logging.DEBUG

    def test_empty_file_var_ignored(self):
        pkg = configure_cli_logging(environ={"SLIMLIBS_LOG_FILE": ""})
        assert len(pkg.handlers) == 1


class TestCLILogging:
    def test_debug_flag(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--debug", "data", "check"])
        assert result.exit_code == 0
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG

    def test_env_level(self, monkeypatch):
        monkeypatch.setenv("SLIMLIBS_LOG_LEVEL", "ERROR")
        runner = CliRunner()
        result = runner.invoke(cli, ["data", "check"])
        assert result.exit_code == 0
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.ERROR
