import logging
import os
import json
from logging.handlers import RotatingFileHandler
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from formslice.config import ParserConfig

# ANSI color codes
COLOR_CODES = {
    "DEBUG": "\033[36m",     # Cyan
    "INFO": "\033[32m",      # Green
    "WARNING": "\033[33m",   # Yellow
    "ERROR": "\033[31m",     # Red
    "CRITICAL": "\033[41m",  # Red background
    "RESET": "\033[0m",      # Reset
}


def _record_context(
    record: logging.LogRecord, show_environment: bool
) -> List[Tuple[str, str]]:
    """Per-record context: the request id of an upload and, optionally, the environment."""
    context = []
    if hasattr(record, "request_id"):
        context.append(("request_id", record.request_id))
    if show_environment and hasattr(record, "environment"):
        context.append(("environment", record.environment))
    return context

# ------------------ FORMATTERS ------------------

class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""
    def __init__(self, default_context: Optional[Dict[str, str]] = None, show_environment: bool = True):
        super().__init__()
        self.default_context = default_context or {}
        self.show_environment = show_environment

    def format(self, record):
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }

        context = dict(self.default_context)
        context.update(_record_context(record, self.show_environment))
        if context:
            log_record["context"] = context

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)


class TextFormatter(logging.Formatter):
    """Human-readable lines, level names optionally colored for terminals."""
    def __init__(self, default_context: Optional[Dict[str, str]] = None, show_environment: bool = False, colored: bool = True):
        super().__init__(
            fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.default_context = default_context or {}
        self.show_environment = show_environment
        self.colored = colored

    def format(self, record):
        levelname = record.levelname
        if self.colored and levelname in COLOR_CODES:
            color = COLOR_CODES[levelname]
            record.levelname = f"\u001b[1m{color}{levelname}{COLOR_CODES['RESET']}\u001b[0m"
        try:
            line = super().format(record)
        finally:
            # the record is shared with other handlers
            record.levelname = levelname

        pairs = [
            ("env" if key == "environment" else key, value)
            for key, value in _record_context(record, self.show_environment)
        ]
        pairs.extend(self.default_context.items())
        if pairs:
            line += " " + " ".join(f"{key}={value}" for key, value in pairs)
        return line


# ------------------ LOGGER CLASS ------------------

class EnvironmentLoggerAdapter(logging.LoggerAdapter):
    """
    A LoggerAdapter that automatically injects 'environment' into every log record.
    """
    def __init__(self, logger, environment: str):
        super().__init__(logger, {"environment": environment})

    def process(self, msg, kwargs):
        extra = kwargs.get("extra", {})
        extra["environment"] = self.extra["environment"]
        kwargs["extra"] = extra
        return msg, kwargs


class Logger:
    """
    Logger factory for formslice tools.

    Configures a named logger (by default the top-level "formslice" logger, so
    the parser and the ASGI adapter, which log to its children, are covered
    too) and returns it wrapped in an EnvironmentLoggerAdapter.

    Example:
        logger = Logger("formslice", json_logs=False, level=logging.DEBUG)
        parser = MultipartParser(logger)
    """

    def __new__(
        cls,
        name: str = "formslice",
        log_file: Optional[str] = None,
        level: int = logging.INFO,
        max_bytes: int = 5_000_000,
        backup_count: int = 3,
        json_logs: bool = True,
        to_console: bool = True,
        environment: str = "production",
        default_context: Optional[Dict[str, str]] = None,
        show_environment: bool = False,
        colored_console: bool = True,
    ) -> EnvironmentLoggerAdapter:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False
        cls._drop_handlers(logger)

        if json_logs:
            formatter = JSONFormatter(default_context, show_environment)
        else:
            formatter = TextFormatter(default_context, show_environment, colored_console)

        handlers: List[logging.Handler] = []
        if log_file:
            os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
            handlers.append(
                RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
            )
        if to_console:
            handlers.append(logging.StreamHandler())

        for handler in handlers:
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return EnvironmentLoggerAdapter(logger, environment)

    @classmethod
    def from_config(
        cls, config: "ParserConfig", name: str = "formslice", **kwargs
    ) -> EnvironmentLoggerAdapter:
        """Configure a logger from the level, format and environment of a ParserConfig."""
        return cls(
            name,
            level=config.log_level_number,
            json_logs=config.json_logs,
            environment=config.environment,
            **kwargs,
        )

    @staticmethod
    def _drop_handlers(logger: logging.Logger) -> None:
        # Avoid duplicate handlers if logger is re-created
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
