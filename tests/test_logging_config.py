"""
Unit tests for solid_mesh.logging_config module.

Tests:
- JSON formatter output
- Console formatter output
- Logging setup
- Timing utilities
"""

import json
import logging
import sys
from io import StringIO

import pytest

from solid_mesh.logging_config import (
    PACKAGE_LOGGER,
    ConsoleFormatter,
    JSONFormatter,
    configure_default_logging,
    get_logger,
    log_timing,
    setup_logging,
    timed,
)


def _record(name="test", level=logging.INFO, msg="Test message", lineno=1, exc_info=None):
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=lineno,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


def _stream_logger(name):
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger.handlers = [handler]
    return logger, stream


class TestJSONFormatter:
    """Tests for JSONFormatter class."""

    def test_basic_format(self):
        """Basic JSON log format."""
        data = json.loads(JSONFormatter().format(_record(name="solid_mesh.primitives")))

        assert data["level"] == "INFO"
        assert data["logger"] == "solid_mesh.primitives"
        assert data["message"] == "Test message"
        assert "timestamp" in data
        assert "location" not in data

    def test_extra_fields(self):
        """Extra fields are included in JSON output."""
        record = _record()
        record.operation = "generate_sphere"
        record.vertex_count = 441

        data = json.loads(JSONFormatter().format(record))

        assert data["operation"] == "generate_sphere"
        assert data["vertex_count"] == 441

    def test_extra_fields_disabled(self):
        """include_extra=False drops extra fields."""
        record = _record()
        record.vertex_count = 441

        data = json.loads(JSONFormatter(include_extra=False).format(record))

        assert "vertex_count" not in data

    def test_non_serializable_extra(self):
        """Values json cannot encode are stringified."""
        record = _record()
        record.kind = object()

        data = json.loads(JSONFormatter().format(record))

        assert isinstance(data["kind"], str)

    def test_location_for_warning(self):
        """Location info is included for warnings."""
        data = json.loads(JSONFormatter().format(_record(level=logging.WARNING, lineno=42)))

        assert data["location"]["line"] == 42

    def test_exception_format(self):
        """Exceptions are formatted."""
        try:
            raise ValueError("radius must be > 0")
        except ValueError:
            record = _record(level=logging.ERROR, exc_info=sys.exc_info())

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError" in data["exception"]

    def test_unicode_message(self):
        """Unicode characters survive unescaped."""
        data = json.loads(JSONFormatter().format(_record(msg="Радиус ⌀ 2.0 ±0.1")))

        assert "⌀" in data["message"]


class TestConsoleFormatter:
    """Tests for ConsoleFormatter class."""

    def test_basic_format(self):
        """Package prefix is stripped from the logger name."""
        result = ConsoleFormatter(use_colors=False).format(
            _record(name="solid_mesh.primitives.generators", msg="Sphere built")
        )

        assert "INFO" in result
        assert "primitives.generators: Sphere built" in result
        assert "solid_mesh." not in result

    def test_extra_fields_shown(self):
        """Extra fields are shown inline; floats are shortened."""
        record = _record()
        record.elapsed_seconds = 0.0123456

        result = ConsoleFormatter(use_colors=False, show_extra=True).format(record)

        assert "elapsed_seconds=0.0123" in result

    def test_long_list_collapsed(self):
        """Long sequences are summarized by length."""
        record = _record()
        record.color = [1.0, 0.5, 0.0, 1.0]

        result = ConsoleFormatter(use_colors=False).format(record)

        assert "color=[...4 items]" in result

    def test_colors(self):
        """ANSI codes only when colors are enabled."""
        record = _record(level=logging.ERROR)

        assert "\033[" not in ConsoleFormatter(use_colors=False).format(record)
        assert "\033[31m" in ConsoleFormatter(use_colors=True).format(record)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_returns_package_logger(self):
        logger = setup_logging(level=logging.DEBUG, console=False)
        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

    def test_console_handler_added(self):
        logger = setup_logging(console=True)
        stream_handlers = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
        assert len(stream_handlers) == 1

    def test_repeated_setup_does_not_duplicate(self):
        """Calling setup twice leaves one console handler."""
        setup_logging(console=True)
        logger = setup_logging(console=True)
        assert len(logger.handlers) == 1

    def test_json_file_handler(self, tmp_path):
        """JSON-lines file receives messages and extras."""
        json_path = tmp_path / "log.json"
        logger = setup_logging(json_file=json_path, console=False)
        get_logger("solid_mesh.test").info("Mesh built", extra={"vertex_count": 9})

        for handler in logger.handlers:
            handler.flush()

        data = json.loads(json_path.read_text(encoding="utf-8").strip())
        assert data["message"] == "Mesh built"
        assert data["logger"] == "solid_mesh.test"
        assert data["vertex_count"] == 9

    def test_level_filters(self, tmp_path):
        """Records below the level are dropped."""
        json_path = tmp_path / "log.json"
        logger = setup_logging(level=logging.WARNING, json_file=json_path, console=False)
        logger.info("hidden")
        logger.warning("shown")

        for handler in logger.handlers:
            handler.flush()

        lines = json_path.read_text(encoding="utf-8").strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["message"] == "shown"


class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_named_logger(self):
        logger = get_logger("solid_mesh.transform")
        assert logger.name == "solid_mesh.transform"

    def test_same_logger_returned(self):
        assert get_logger("solid_mesh.io") is get_logger("solid_mesh.io")


class TestLogTiming:
    """Tests for log_timing context manager."""

    def test_logs_start_and_complete(self):
        logger, stream = _stream_logger("timing_test")

        with log_timing(logger, "generate_cone", slices=8):
            pass

        output = stream.getvalue()
        assert "Starting: generate_cone" in output
        assert "Completed: generate_cone" in output

    def test_timing_info_updated(self):
        """Yielded dict gains elapsed_seconds and keeps caller fields."""
        logger, _ = _stream_logger("timing_test2")

        with log_timing(logger, "operation") as info:
            info["vertex_count"] = 22

        assert info["elapsed_seconds"] >= 0
        assert info["vertex_count"] == 22

    def test_completion_carries_fields(self):
        """Caller fields reach the completion record."""
        logger = logging.getLogger("timing_test4")
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        records = []

        class CaptureHandler(logging.Handler):
            def emit(self, record):
                records.append(record)

        logger.handlers = [CaptureHandler()]

        with log_timing(logger, "generate_sphere", lat_bands=2) as info:
            info["index_count"] = 24

        complete = records[-1]
        assert complete.event == "complete"
        assert complete.lat_bands == 2
        assert complete.index_count == 24

    def test_error_logged_on_exception(self):
        logger, stream = _stream_logger("timing_test3")

        with pytest.raises(ValueError):
            with log_timing(logger, "failing operation"):
                raise ValueError("Test error")

        output = stream.getvalue()
        assert "ERROR: Failed: failing operation" in output
        assert "Test error" in output
        assert "Completed" not in output


class TestTimedDecorator:
    """Tests for timed decorator."""

    def test_function_executed(self):
        logger, stream = _stream_logger("timed_test")

        @timed(logger=logger)
        def add(a, b):
            return a + b

        assert add(2, 3) == 5
        assert "Completed: add" in stream.getvalue()

    def test_custom_operation_name(self):
        logger, stream = _stream_logger("timed_test2")

        @timed(logger=logger, operation="build")
        def make():
            return 1

        make()
        assert "Starting: build" in stream.getvalue()

    def test_preserves_function_name(self):
        @timed()
        def my_function():
            pass

        assert my_function.__name__ == "my_function"


class TestConfigureDefaultLogging:
    """Tests for configure_default_logging function."""

    def test_info_level_default(self):
        assert configure_default_logging(verbose=False).level == logging.INFO

    def test_debug_level_verbose(self):
        assert configure_default_logging(verbose=True).level == logging.DEBUG
