"""Logging setup for the strex command line."""

import logging
import sys
from datetime import datetime, timezone


class ConsoleFormatter(logging.Formatter):
    """Compact console formatter with UTC timestamps."""

    def __init__(self, version: str) -> None:
        super().__init__(fmt=f"%(asctime)s | strex {version} | %(levelname)-7s | %(name)s | %(message)s")

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """ISO 8601 in UTC, to the microsecond."""
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return stamp.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def setup_logging(version: str, *, debug: bool = False) -> None:
    """
    Configure the root logger.

    Logs go to stderr so that command output on stdout stays clean. The
    level is WARNING by default and DEBUG when ``debug`` is set.

    Args:
        version: The strex version, included in every line.
        debug: If True, lower the level to DEBUG.

    """
    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    level = logging.DEBUG if debug else logging.WARNING
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(ConsoleFormatter(version))
    root_logger.addHandler(console_handler)

    if debug:
        logging.getLogger(__name__).debug("Debug logging enabled")
