"""Configures the loggers used by the server and the client"""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_log_level(name: Optional[str]) -> int:
    name = (name or "INFO").upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(level: str, log_file: Optional[str] = None) -> None:
    """Sends log records to the console and optionally to a file.

    Args:
        level (str): Name of the log level, unknown names fall back to INFO.
        log_file (str, optional): Path of a file that receives the same
            records as the console.
    """

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=parse_log_level(level), format=LOG_FORMAT, handlers=handlers, force=True
    )
