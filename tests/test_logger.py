"""
Unit tests for the formslice logger factory and formatters.
"""

import json
import logging
import sys

from formslice import ParserConfig
from formslice.logger import (
    COLOR_CODES,
    EnvironmentLoggerAdapter,
    JSONFormatter,
    Logger,
    TextFormatter,
)


def make_record(message="Parsed 2 multipart record(s)", level=logging.INFO, **extra):
    record = logging.LogRecord(
        name="formslice.asgi",
        level=level,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Test JSONFormatter output."""

    def test_basic_fields(self):
        payload = json.loads(JSONFormatter().format(make_record()))

        assert payload["logger"] == "formslice.asgi"
        assert payload["level"] == "INFO"
        assert payload["message"] == "Parsed 2 multipart record(s)"
        assert payload["timestamp"].endswith("Z")
        assert "context" not in payload

    def test_context(self):
        formatter = JSONFormatter(default_context={"service": "uploads"})
        record = make_record(request_id="abc123", environment="staging")

        payload = json.loads(formatter.format(record))

        assert payload["context"] == {
            "service": "uploads",
            "request_id": "abc123",
            "environment": "staging",
        }

    def test_exception_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        payload = json.loads(JSONFormatter().format(record))

        assert "ValueError: boom" in payload["exception"]


class TestTextFormatter:
    """Test TextFormatter output."""

    def test_plain(self):
        line = TextFormatter(colored=False).format(make_record(request_id="abc123"))

        assert "INFO [formslice.asgi] Parsed 2 multipart record(s)" in line
        assert line.endswith("request_id=abc123")

    def test_colored_level_does_not_leak(self):
        record = make_record(level=logging.WARNING)

        line = TextFormatter(colored=True).format(record)

        assert COLOR_CODES["WARNING"] in line
        assert record.levelname == "WARNING"

    def test_environment_shown_on_request(self):
        line = TextFormatter(show_environment=True, colored=False).format(
            make_record(environment="dev")
        )

        assert "env=dev" in line


class TestLogger:
    """Test the Logger factory."""

    def test_returns_adapter_with_environment(self):
        adapter = Logger("formslice", to_console=False, environment="staging")

        assert isinstance(adapter, EnvironmentLoggerAdapter)
        assert adapter.extra == {"environment": "staging"}
        assert adapter.logger.propagate is False

    def test_recreate_does_not_duplicate_handlers(self):
        Logger("formslice", json_logs=False)
        adapter = Logger("formslice", json_logs=False)

        assert len(adapter.logger.handlers) == 1
        assert isinstance(adapter.logger.handlers[0].formatter, TextFormatter)

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "formslice.log"
        adapter = Logger("formslice", log_file=str(log_file), to_console=False)

        logging.getLogger("formslice.parser").warning("Multipart parse failed: %s", "NoFilesFound")
        adapter.info("done", extra={"request_id": "r1"})
        for handler in adapter.logger.handlers:
            handler.flush()

        lines = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert lines[0]["logger"] == "formslice.parser"
        assert lines[0]["message"] == "Multipart parse failed: NoFilesFound"
        assert lines[1]["context"] == {"request_id": "r1"}

    def test_from_config(self):
        config = ParserConfig(log_level="warning", json_logs=False, environment="dev")

        adapter = Logger.from_config(config, to_console=False)

        assert adapter.logger.level == logging.WARNING
        assert adapter.extra == {"environment": "dev"}
