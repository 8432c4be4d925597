import io
import json
import logging
import logging.handlers

import pytest

from timelet.logger import (
    LogFormat,
    LogLevel,
    TimeletLogger,
    TimeletLoggerConfig,
    configure_logging,
    get_logger,
    get_run_logger,
    setup_default_logging,
)


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    configure_logging(TimeletLoggerConfig())


def capture(format_type: LogFormat, level=LogLevel.DEBUG) -> io.StringIO:
    """Reconfigure timelet logging and redirect its console handler into a buffer."""
    configure_logging(TimeletLoggerConfig(level=level, format_type=format_type))
    stream = io.StringIO()
    for handler in TimeletLogger().logger.handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.setStream(stream)
    return stream


class TestTimeletLoggerConfig:
    def test_level_normalization(self):
        assert TimeletLoggerConfig(level=LogLevel.WARNING).level == logging.WARNING
        assert TimeletLoggerConfig(level="debug").level == logging.DEBUG
        assert TimeletLoggerConfig(level=logging.ERROR).level == logging.ERROR
        assert TimeletLoggerConfig(level="nonsense").level == logging.INFO

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            TimeletLoggerConfig(level=1.5)

    def test_format_from_string(self):
        assert TimeletLoggerConfig(format_type="json").format_type == LogFormat.JSON


class TestTimeletLogger:
    def test_singleton(self):
        assert TimeletLogger() is TimeletLogger()

    def test_namespacing(self):
        assert get_logger().name == "timelet"
        assert get_logger("core").name == "timelet.core"
        assert get_logger("timelet.core.emitter").name == "timelet.core.emitter"

    def test_child_logs_reach_root_handlers(self):
        stream = capture(LogFormat.SIMPLE)
        get_logger("tests").info("hello")
        assert "INFO - hello" in stream.getvalue()

    def test_level_filtering(self):
        stream = capture(LogFormat.SIMPLE, level=LogLevel.WARNING)
        get_logger("tests").info("quiet")
        get_logger("tests").warning("loud")
        output = stream.getvalue()
        assert "quiet" not in output
        assert "loud" in output

    def test_json_run_logger(self):
        """Test that run loggers stamp run_id into JSON records."""
        stream = capture(LogFormat.JSON)
        get_run_logger("calm-tide-beef").info("tick")
        entry = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert entry["run_id"] == "calm-tide-beef"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "timelet.run"
        assert "tick" in entry["message"]

    def test_json_extra_fields(self):
        configure_logging(
            TimeletLoggerConfig(format_type=LogFormat.JSON, extra_fields={"service": "clock"})
        )
        stream = io.StringIO()
        for handler in TimeletLogger().logger.handlers:
            handler.setStream(stream)
        get_logger("tests").info("with extras")
        entry = json.loads(stream.getvalue().strip())
        assert entry["service"] == "clock"

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "timelet.log"
        setup_default_logging(level=LogLevel.INFO, log_file=str(log_file))
        get_logger("tests").info("to file")
        for handler in TimeletLogger().logger.handlers:
            handler.flush()
        assert "to file" in log_file.read_text()

    def test_rotating_log_file(self, tmp_path):
        log_file = tmp_path / "rotating.log"
        setup_default_logging(log_file=str(log_file), rotation=True, max_backup=2)
        handlers = TimeletLogger().logger.handlers
        assert any(isinstance(h, logging.handlers.TimedRotatingFileHandler) for h in handlers)
