import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import TextIO

# Attributes passed through ``extra=`` that end up in JSON log lines.
CHECK_FIELDS = ("check_kind", "verdict_source", "is_safe", "risk_score")

# Third-party loggers that are too chatty at INFO.
QUIET_LOGGERS = ("urllib3", "httpx")


class JsonFormatter(logging.Formatter):
    """Format log records as JSON, including check metadata when present."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "time": self.formatTime(record, "%Y-%m-%d %H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        for field in CHECK_FIELDS:
            if hasattr(record, field):
                data[field] = getattr(record, field)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


def configure_logging(
    *,
    level: str | int = logging.INFO,
    fmt: str | None = None,
    log_file: str | None = None,
    json_format: bool = False,
    max_bytes: int = 0,
    backup_count: int = 0,
    stream: TextIO | None = None,
) -> None:
    """Configure the root logger once for the service and the CLI.

    Parameters
    ----------
    level:
        Logging level as string or numeric constant.
    fmt:
        Format string for plain text log lines.
    log_file:
        Optional path to a file where logs should also be written.
    json_format:
        Emit one JSON object per line instead of plain text.
    max_bytes:
        Rotate ``log_file`` once it grows past this size; 0 disables rotation.
    backup_count:
        Number of rotated files to keep.
    stream:
        Stream for the console handler; defaults to stdout.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    log_level = level
    if isinstance(level, str):
        log_level = getattr(logging, level.upper(), logging.INFO)

    if json_format:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt or "%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if log_file and max_bytes > 0:
        handlers.append(
            RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
        )
    elif log_file:
        handlers.append(logging.FileHandler(log_file))

    root.setLevel(log_level)
    for h in handlers:
        h.setFormatter(formatter)
        root.addHandler(h)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
