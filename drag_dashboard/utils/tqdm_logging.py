"""
Tqdm-compatible logging.

TqdmLoggingHandler routes log messages through tqdm.write() so they don't
break up progress bars drawn by the CLI.
"""

import logging
import sys
from typing import TextIO

from tqdm import tqdm


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes through tqdm.write() to avoid progress bar interference.

    Usage:
        handler = TqdmLoggingHandler(level=logging.INFO)
        logger.addHandler(handler)
    """

    def __init__(self, level: int = logging.NOTSET, stream: TextIO | None = None):
        """
        Initialize the handler.

        Args:
            level: Minimum logging level to handle
            stream: Output stream (default: sys.stderr for tqdm compatibility)
        """
        super().__init__(level)
        self.stream = stream or sys.stderr

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record through tqdm.write()."""
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)
