# Area: Shared Tests
"""Tests for logging setup and interactive mode."""

import json
import logging

import pytest

from ttt_client._shared.logging_config import (
    InteractiveFilter,
    JSONFormatter,
    TerminalFormatter,
    disable_interactive_mode,
    enable_interactive_mode,
    is_interactive_mode_enabled,
    setup_logging,
)


def make_record(level=logging.INFO, msg="hello", **extra):
    record = logging.LogRecord("ttt_client.test", level, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_package_logger():
    pkg_logger = logging.getLogger("ttt_client")
    handlers, level, propagate = list(pkg_logger.handlers), pkg_logger.level, pkg_logger.propagate
    yield pkg_logger
    for handler in pkg_logger.handlers:
        handler.close()
    pkg_logger.handlers[:] = handlers
    pkg_logger.setLevel(level)
    pkg_logger.propagate = propagate


class TestInteractiveMode:
    """Tests for the terminal suppression flag."""

    def test_toggle(self):
        try:
            enable_interactive_mode()
            assert is_interactive_mode_enabled() is True
            assert InteractiveFilter().filter(make_record()) is False
        finally:
            disable_interactive_mode()
        assert is_interactive_mode_enabled() is False
        assert InteractiveFilter().filter(make_record()) is True


class TestFormatters:
    """Tests for the terminal and file formatters."""

    def test_terminal_formatter_colors_level_only_in_output(self):
        record = make_record(logging.ERROR)
        output = TerminalFormatter(fmt="%(levelname)s %(message)s").format(record)
        assert output == "\033[31mERROR\033[0m hello"
        assert record.levelname == "ERROR"

    def test_json_formatter_fields(self):
        record = make_record(instruction="play", signature="sig", game_address="Game111")
        data = json.loads(JSONFormatter().format(record))
        assert data["level"] == "INFO"
        assert data["logger"] == "ttt_client.test"
        assert data["message"] == "hello"
        assert data["instruction"] == "play"
        assert data["signature"] == "sig"
        assert data["game_address"] == "Game111"

    def test_json_formatter_omits_missing_extras(self):
        data = json.loads(JSONFormatter().format(make_record()))
        assert "instruction" not in data


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_terminal_and_file_handlers(self, tmp_path, restore_package_logger):
        log_file = tmp_path / "logs" / "client.log"

        setup_logging(str(log_file), logging.DEBUG)

        pkg_logger = restore_package_logger
        assert pkg_logger.level == logging.DEBUG
        assert pkg_logger.propagate is False
        assert len(pkg_logger.handlers) == 2
        logging.getLogger("ttt_client.lifecycle").info("Phase: IDLE → CREATING")
        for handler in pkg_logger.handlers:
            handler.flush()
        line = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert line["message"] == "Phase: IDLE → CREATING"

    def test_repeated_setup_does_not_duplicate_handlers(self, tmp_path, restore_package_logger):
        setup_logging(str(tmp_path / "a.log"))
        setup_logging(str(tmp_path / "b.log"))
        assert len(restore_package_logger.handlers) == 2
