"""Tests for centralized logging."""

import json
import logging
import sys
import pytest
from nodecred.infrastructure.logging import configure_logging, resolve_level, JSONFormatter


class TestConfigureLogging:
    def test_default_level(self):
        configure_logging(level=logging.INFO)
        logger = logging.getLogger("nodecred")
        assert logger.level == logging.INFO

    def test_level_by_name(self):
        configure_logging(level="debug")
        logger = logging.getLogger("nodecred")
        assert logger.level == logging.DEBUG

    def test_json_format(self):
        configure_logging(level=logging.INFO, json_format=True)
        logger = logging.getLogger("nodecred")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_human_format(self):
        configure_logging(level=logging.INFO, json_format=False)
        logger = logging.getLogger("nodecred")
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_replaces_handlers(self):
        configure_logging(level=logging.INFO)
        configure_logging(level=logging.DEBUG)
        logger = logging.getLogger("nodecred")
        assert len(logger.handlers) == 1


class TestResolveLevel:
    def test_int_passthrough(self):
        assert resolve_level(logging.WARNING) == logging.WARNING

    def test_name(self):
        assert resolve_level("warning") == logging.WARNING

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            resolve_level("chatty")


class TestJSONFormatter:
    def test_format_basic(self):
        formatter = JSONFormatter()
        record = logging.LogRecord(
            name="nodecred.test",
            level=logging.INFO,
            pathname="test.py",
            lineno=1,
            msg="node %s not found",
            args=("node-1",),
            exc_info=None,
        )
        data = json.loads(formatter.format(record))
        assert data["message"] == "node node-1 not found"
        assert data["level"] == "INFO"
        assert data["logger"] == "nodecred.test"
        assert "timestamp" in data

    def test_format_with_exception(self):
        formatter = JSONFormatter()
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()

        record = logging.LogRecord(
            name="nodecred.test",
            level=logging.ERROR,
            pathname="test.py",
            lineno=1,
            msg="error occurred",
            args=(),
            exc_info=exc_info,
        )
        data = json.loads(formatter.format(record))
        assert "ValueError" in data["exception"]
