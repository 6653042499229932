"""
OptoScreen logging.

The API process calls setup_logging() once at startup with the level and
file from optoscreen.config. Engine modules only call get_logger(__name__);
their lines read like

    [2026-10-18T09:12:03+00:00] INFO     [optoscreen.core.clinical.engine] EvaluationEngine [full]: 2 finding(s), ...

Colour codes are written only when stdout is a terminal, so container logs
stay plain.
"""
import logging
import sys
from typing import Optional
from datetime import datetime, timezone


class StructuredFormatter(logging.Formatter):
    """Single-line formatter: [timestamp] LEVEL [logger] message."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'
    }

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        record.timestamp = datetime.now(timezone.utc).isoformat()

        if self.use_color:
            color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
            reset = self.COLORS['RESET']
        else:
            color = reset = ""

        log_message = (
            f"{color}[{record.timestamp}] "
            f"{record.levelname:8} "
            f"[{record.name}] "
            f"{record.getMessage()}{reset}"
        )

        if record.exc_info:
            log_message += f"\n{self.formatException(record.exc_info)}"

        return log_message


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Install the OptoScreen handlers on the root logger, replacing any others.

    Args:
        level:    OPTOSCREEN_LOG_LEVEL value. An unrecognised name falls back
                  to INFO rather than aborting startup.
        log_file: OPTOSCREEN_LOG_FILE value; when set, every log line is also
                  appended there as pipe-separated lines.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter(use_color=sys.stdout.isatty()))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
        ))
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Logger for an optoscreen module; pass __name__."""
    return logging.getLogger(name)
