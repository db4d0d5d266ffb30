"""
Logging utilities for drag_dashboard CLI.

In execute mode a command logs to a timestamped file under logs/ and to the
console. Package loggers (drag_dashboard.*) share the file; on the console
they only surface warnings, such as missing exchange rates or load failures.
"""

import logging
import sys
import time
from pathlib import Path

from drag_dashboard.utils.tqdm_logging import TqdmLoggingHandler

PACKAGE_LOGGER = "drag_dashboard"
FILE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
CONSOLE_FORMAT = "%(message)s"


class FlushingFileHandler(logging.FileHandler):
    """File handler that flushes every record, so interrupted runs keep their log."""

    def emit(self, record):
        super().emit(record)
        self.flush()


def _console_handler(level: int, tqdm_compatible: bool) -> logging.Handler:
    handler: logging.Handler
    if tqdm_compatible:
        handler = TqdmLoggingHandler(level=level)
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _route(logger: logging.Logger, *handlers: logging.Handler) -> logging.Logger:
    """Replace a logger's handlers and stop it propagating to root."""
    logger.setLevel(logging.DEBUG)
    logger.handlers = list(handlers)
    logger.propagate = False
    return logger


def setup_logging(
    script_name: str,
    execute: bool = False,
    log_dir: Path = Path("logs"),
    tqdm_compatible: bool = True,
) -> logging.Logger:
    """
    Set up logging for a command.

    Args:
        script_name: Command name, used as logger name and log file prefix
        execute: If True, log to file + console. If False, only console.
        log_dir: Directory for log files
        tqdm_compatible: Write console output through tqdm.write

    Returns:
        Logger named after the command
    """
    if not execute:
        logging.basicConfig(level=logging.INFO, format=CONSOLE_FORMAT, stream=sys.stdout)
        return logging.getLogger(script_name)

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{script_name}_{time.strftime('%Y%m%d_%H%M%S')}.log"

    file_handler = FlushingFileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    logger = _route(
        logging.getLogger(script_name),
        file_handler,
        _console_handler(logging.INFO, tqdm_compatible),
    )
    _route(
        logging.getLogger(PACKAGE_LOGGER),
        file_handler,
        _console_handler(logging.WARNING, tqdm_compatible),
    )

    logger.info(f"Log file: {log_file}")
    return logger


def print_header(title: str, logger: logging.Logger | None = None):
    """Log a title framed by rule lines."""
    logger = logger or logging.getLogger(__name__)
    rule = "=" * 70
    for line in (rule, title, rule):
        logger.info(line)
