"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

import pytest

from src.infrastructure.logging import logger as logger_module


@pytest.fixture
def fake_build(monkeypatch):
    """Replace LoggerBuilder.build and record the subdir of each build."""
    built: list[tuple[str, str]] = []
    fake_logger = MagicMock()

    def _build(self):
        built.append((self._subdir, self._prefix))
        return fake_logger

    monkeypatch.setattr(logger_module.LoggerBuilder, "build", _build)
    for cls in (
        logger_module.Logger,
        logger_module.AppLogger,
        logger_module.UsageLogger,
    ):
        monkeypatch.setattr(cls, "_instance", None)
    return fake_logger, built


def test_builder_writes_dated_file_under_project_logs(tmp_path, monkeypatch):
    """The file handler should target logs/<subdir>/<stamp>_<prefix>.log."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20240315"),
    )

    builder = (
        logger_module.LoggerBuilder()
        .name("finance.test.builder")
        .subdir("payments")
        .prefix("payment_logs")
        .console(False)
        .level(logging.DEBUG)
    )
    built = builder.build()

    assert built.name == "finance.test.builder"
    assert built.level == logging.DEBUG
    assert built.propagate is False
    assert len(built.handlers) == 1
    expected = tmp_path / "logs" / "payments" / "20240315_payment_logs.log"
    assert built.handlers[0].baseFilename == str(expected)
    assert builder.build() is built
    for handler in built.handlers:
        handler.close()


def test_builder_uses_custom_factories(tmp_path, monkeypatch):
    """Injected factories should receive the shared formatter."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    fmt = logging.Formatter("%(message)s")
    seen = {}

    def _file_handler(path, formatter):
        seen["path"] = path
        seen["file_fmt"] = formatter
        return logging.NullHandler()

    def _console_handler(formatter):
        seen["console_fmt"] = formatter
        return logging.NullHandler()

    built = (
        logger_module.LoggerBuilder()
        .name("finance.test.factories")
        .formatter(lambda: fmt)
        .file_handler(_file_handler)
        .console_handler(_console_handler)
        .build()
    )

    assert len(built.handlers) == 2
    assert seen["file_fmt"] is fmt
    assert seen["console_fmt"] is fmt
    assert seen["path"].parent == tmp_path / "logs" / "app"


def test_default_handlers_log_at_info(tmp_path):
    fmt = logger_module.LoggerBuilder._default_formatter()
    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "finance.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)

    assert isinstance(file_handler, logging.FileHandler)
    assert file_handler.level == logging.INFO
    assert file_handler.formatter is fmt
    assert isinstance(console_handler, logging.StreamHandler)
    assert console_handler.level == logging.INFO
    file_handler.close()


def test_logger_singleton_delegates(fake_build):
    """Logger methods should forward to the wrapped logger."""
    fake_logger, _ = fake_build

    logger = logger_module.Logger("finance")
    logger.debug("dbg")
    logger.info("saved")
    logger.warning("rejected")
    logger.error("broken")
    logger.critical("down")

    fake_logger.debug.assert_called_with("dbg")
    fake_logger.info.assert_called_with("saved")
    fake_logger.warning.assert_called_with("rejected")
    fake_logger.error.assert_called_with("broken")
    fake_logger.critical.assert_called_with("down")
    assert logger_module.Logger("other") is logger


def test_app_and_usage_loggers_use_their_own_files(fake_build):
    """Each accessor returns its own singleton with its own log folder."""
    _, built = fake_build

    app_logger = logger_module.get_app_logger()
    usage_logger = logger_module.get_usage_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_usage_logger() is usage_logger
    assert app_logger is not usage_logger
    assert built == [("app", "app_logs"), ("usage", "usage_logs")]
