"""Unit tests for logging setup."""

import json
import logging

import pytest

from flyfit_coordination.utils.logging import JSONFormatter, TextFormatter, setup_logging


def make_record(message="hello", level=logging.INFO, **extra):
    record = logging.LogRecord("flyfit.test", level, __file__, 1, message, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Test JSON formatting."""

    def test_basic_fields(self):
        """Test standard fields are present."""
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "flyfit.test"
        assert data["message"] == "hello"
        assert data["timestamp"].endswith("Z")

    def test_extra_fields_included(self):
        """Test values passed via extra= are included."""
        data = json.loads(JSONFormatter().format(make_record(queue="profile", pending=2)))

        assert data["queue"] == "profile"
        assert data["pending"] == 2
        assert "args" not in data

    def test_exception_included(self):
        """Test exception info is rendered."""
        try:
            raise ValueError("boom")
        except ValueError:
            import sys

            record = logging.LogRecord(
                "flyfit.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        data = json.loads(JSONFormatter().format(record))
        assert "ValueError: boom" in data["exception"]


class TestTextFormatter:
    """Test text formatting."""

    def test_plain_output_without_tty(self):
        """Test no color codes are emitted when stderr is not a terminal."""
        formatter = TextFormatter(use_colors=False)
        output = formatter.format(make_record(level=logging.WARNING))

        assert "[WARNING] flyfit.test: hello" in output
        assert "\033[" not in output


class TestSetupLogging:
    """Test setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_json_handler_installed(self):
        """Test json format installs a JSONFormatter."""
        setup_logging(level="DEBUG", format_type="json")
        root = logging.getLogger()

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_text_handler_installed(self):
        """Test text format installs a TextFormatter."""
        setup_logging(level="warning", format_type="text")
        root = logging.getLogger()

        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_unknown_level_falls_back_to_info(self):
        """Test an unknown level name means INFO."""
        setup_logging(level="chatty")
        assert logging.getLogger().level == logging.INFO
