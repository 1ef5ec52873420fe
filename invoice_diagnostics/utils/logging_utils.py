import copy
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, TextIO

from invoice_diagnostics.utils.colors import Colors

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """UTC timestamp with millisecond precision, e.g. 2025-03-01T10:15:30.123Z"""
    now = now or datetime.now(timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def log_file_path(log_dir: str, prefix: str, now: Optional[datetime] = None) -> Path:
    """
    Build the per-run log file path, e.g. logs/gemini-test-2025-03-01T10-15-30.123Z.log

    Colons are replaced so the name is valid on every filesystem.
    """
    stamp = iso_timestamp(now).replace(":", "-")
    return Path(log_dir) / f"{prefix}-{stamp}.log"


class RunLogFormatter(logging.Formatter):
    """Plain formatter with ISO-8601 UTC timestamps, used for the run log file"""

    def __init__(self, fmt: str = LOG_FORMAT):
        super().__init__(fmt)

    def formatTime(self, record, datefmt=None):
        return iso_timestamp(datetime.fromtimestamp(record.created, timezone.utc))


class ColoredFormatter(RunLogFormatter):
    """
    Custom formatter to add colors to log levels and specific messages.
    Highlights the pass/fail summary lines of a diagnostic run.
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.GREY,
        logging.INFO: Colors.BLUE,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED
    }

    def format(self, record):
        # Copy so the file handler still receives the record without ANSI codes
        record = copy.copy(record)

        color = self.LEVEL_COLORS.get(record.levelno, Colors.RESET)
        record.levelname = f"{color}{record.levelname}{Colors.RESET}"

        message = record.getMessage()
        highlight = None
        if "Test Summary" in message:
            highlight = Colors.MAGENTA + Colors.BOLD
        elif "PASS ✅" in message:
            highlight = Colors.get_verdict_color("PASS")
        elif "FAIL ❌" in message or "ERROR ❌" in message:
            highlight = Colors.get_verdict_color("FAIL")

        if highlight:
            record.msg = f"{highlight}{message}{Colors.RESET}"
            record.args = None

        return super().format(record)


def resolve_log_level(level_name: str) -> int:
    """Map a level name to its numeric value, falling back to INFO."""
    return logging._nameToLevel.get(str(level_name).upper(), logging.INFO)


def setup_run_logging(
    prefix: str,
    log_dir: str = "logs",
    level_name: str = "INFO",
    stream: Optional[TextIO] = None,
) -> Path:
    """
    Configure the root logger for one diagnostic run.

    Every record goes to the console (colored on a terminal unless NO_COLOR is set) and to a fresh timestamped
    file under ``log_dir``, which is created if needed.

    Returns:
        Path of the log file for this run
    """
    log_path = log_file_path(log_dir, prefix)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(RunLogFormatter())

    console_stream = stream or sys.stdout
    console_handler = logging.StreamHandler(console_stream)
    if Colors.supports_color(console_stream):
        console_handler.setFormatter(ColoredFormatter())
    else:
        console_handler.setFormatter(RunLogFormatter())

    logging.basicConfig(
        level=resolve_log_level(level_name),
        handlers=[file_handler, console_handler],
        force=True,
    )

    if str(level_name).upper() not in logging._nameToLevel:
        logging.getLogger("Diagnostics").warning(
            "Invalid log level '%s'; defaulting to INFO", level_name
        )

    return log_path
