"""Logging configuration for quoteprompts.

Console output for humans plus a daily JSONL file. Structured events
(``prompt_source``, ``easyquote_request``) land in the file as one record
each, with the event name and its fields kept apart from the log text::

    {"ts": "...", "level": "INFO", "logger": "quoteprompts.easyquote",
     "msg": "EasyQuote GET products -> 200", "event": "easyquote_request",
     "data": {"method": "GET", "path": "products", "status": 200}}
"""

import json
import logging
import sys
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

__all__ = [
    "setup_logging",
    "get_logger",
    "log_event",
    "LOG_DIR",
]

LOG_DIR = Path(__file__).parent.parent / "logs"

ROOT_LOGGER = "quoteprompts"


class EventFileHandler(logging.Handler):
    """Appends records to ``<prefix>_YYYYMMDD.jsonl`` in ``log_dir``."""

    def __init__(self, log_dir: Path, prefix: str = ROOT_LOGGER):
        super().__init__()
        log_dir.mkdir(parents=True, exist_ok=True)
        self.log_dir = log_dir
        self.prefix = prefix

    @property
    def path(self) -> Path:
        return self.log_dir / f"{self.prefix}_{date.today():%Y%m%d}.jsonl"

    def to_entry(self, record: logging.LogRecord) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        event = getattr(record, "event", None)
        if event:
            entry["event"] = event
            entry["data"] = getattr(record, "event_data", {})
        if record.exc_info:
            entry["error"] = logging.Formatter().formatException(record.exc_info)
        return entry

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = json.dumps(self.to_entry(record), ensure_ascii=False, default=str)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception:
            self.handleError(record)


class ColoredConsoleHandler(logging.StreamHandler):
    """Colors the level name when writing to a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        color = self.COLORS.get(record.levelname)
        if color and getattr(self.stream, "isatty", lambda: False)():
            text = text.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)
        return text


def setup_logging(
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """Configure the ``quoteprompts`` logger tree.

    Args:
        level: Threshold for the logger and the console handler
        log_to_file: Write JSONL records under ``log_dir``
        log_to_console: Write human readable lines to stderr
        log_dir: Directory for JSONL files (default: project logs/)

    Returns:
        The package root logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    if log_to_console:
        console = ColoredConsoleHandler(sys.stderr)
        console.setLevel(level)
        console.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s", "%H:%M:%S"))
        logger.addHandler(console)

    if log_to_file:
        logger.addHandler(EventFileHandler(log_dir or LOG_DIR))

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Logger under the package namespace, e.g. ``get_logger("easyquote")``."""
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def log_event(
    event: str,
    message: str,
    level: int = logging.INFO,
    logger_name: str = ROOT_LOGGER,
    **data: Any,
) -> None:
    """Log a structured event; keyword arguments become the event's data."""
    get_logger(logger_name).log(level, message, extra={"event": event, "event_data": data})
