"""Console logging for the translatable CLI."""
from __future__ import annotations

import logging
import sys


LOGGING_CONFIG = {
    "translatable_fields": logging.INFO,
}


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for console output."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        result = super().format(record)
        # Reset levelname for other handlers
        record.levelname = levelname
        return result


def setup_logging(debug: bool = False) -> None:
    """Configure logging to stderr. Safe to call more than once."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    console_handler.setFormatter(
        ColoredFormatter("%(asctime)s %(levelname)-8s %(name)s - %(message)s", datefmt="%H:%M:%S")
    )
    root_logger.addHandler(console_handler)

    for logger_name, level in LOGGING_CONFIG.items():
        logging.getLogger(logger_name).setLevel(logging.DEBUG if debug else level)

    logging.getLogger(__name__).debug("Logging configured (debug=%s)", debug)
