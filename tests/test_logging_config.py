"""Tests for logging setup"""
import logging
from unittest.mock import patch

import pytest

from git_workty.logging_config import ColoredFormatter, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Put the root logger back the way pytest left it."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


class TestSetupLogging:
    """Test handler and level configuration."""

    def test_default_level_is_warning(self, temp_dir):
        setup_logging(log_dir=temp_dir / "logs")
        root_logger = logging.getLogger()
        assert root_logger.level == logging.WARNING
        assert len(root_logger.handlers) == 1
        assert not (temp_dir / "logs").exists()

    def test_verbose_level(self, temp_dir):
        setup_logging(verbose=True, log_dir=temp_dir / "logs")
        assert logging.getLogger().level == logging.INFO

    def test_debug_writes_log_file(self, temp_dir):
        log_dir = temp_dir / "logs"
        setup_logging(debug=True, log_dir=log_dir)
        get_logger("git_workty.config").debug("looking for config")

        for handler in logging.getLogger().handlers:
            handler.flush()
        contents = (log_dir / "git-workty.log").read_text()
        assert "config - DEBUG - looking for config" in contents

    def test_debug_log_defaults_to_user_log_dir(self, temp_dir):
        with patch("git_workty.logging_config.platformdirs.user_log_path",
                   return_value=temp_dir / "user-logs") as user_log_path:
            setup_logging(debug=True)

        user_log_path.assert_called_once_with("workty")
        assert (temp_dir / "user-logs" / "git-workty.log").exists()

    def test_unwritable_log_dir_keeps_console(self, temp_dir):
        blocker = temp_dir / "not-a-dir"
        blocker.write_text("")

        setup_logging(debug=True, log_dir=blocker / "logs")

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)


class TestGetLogger:
    """Test logger naming."""

    def test_strips_package_prefix(self):
        assert get_logger("git_workty.config").name == "config"
        assert get_logger("git_workty.services.git.repository").name == "git.repository"
        assert get_logger("elsewhere").name == "elsewhere"


class TestColoredFormatter:
    """Test level coloring."""

    def test_plain_when_not_a_terminal(self):
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)
        with patch("git_workty.logging_config.sys") as mock_sys:
            mock_sys.stderr.isatty.return_value = False
            assert ColoredFormatter(fmt="%(levelname)s %(message)s").format(record) == "ERROR boom"

    def test_colored_on_terminal_leaves_record_alone(self):
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)
        with patch("git_workty.logging_config.sys") as mock_sys:
            mock_sys.stderr.isatty.return_value = True
            output = ColoredFormatter(fmt="%(levelname)s %(message)s").format(record)

        assert output == "\033[31mERROR\033[0m boom"
        assert record.levelname == "ERROR"
