"""Tests for logging setup."""

import logging
from pathlib import Path

import pytest

from hostkit.core.exceptions import ConfigError
from hostkit.core.logging import get_logger, parse_level, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_parse_level_accepts_any_case() -> None:
    assert parse_level(" debug ") == logging.DEBUG
    assert parse_level("Warning") == logging.WARNING


def test_unknown_level_is_a_config_error() -> None:
    with pytest.raises(ConfigError, match="LOUD"):
        setup_logging(level="LOUD")


def test_log_file_receives_records(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "hostkit.log"

    setup_logging(level="INFO", log_file=log_file)
    get_logger("hostkit.test").info("Wrote /etc/hostname: web01")
    get_logger("hostkit.test").debug("not at this level")

    text = log_file.read_text()
    assert "INFO" in text
    assert "hostkit.test: Wrote /etc/hostname: web01" in text
    assert "not at this level" not in text


def test_library_loggers_are_quieted() -> None:
    setup_logging(level="DEBUG")

    assert logging.getLogger("urllib3").level == logging.WARNING
    assert logging.getLogger("paramiko").level == logging.WARNING
