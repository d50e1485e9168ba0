"""Stores the settings read from the environment.

Values come from the process environment, with a .env file in the working
directory filling in anything that is not set.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from data_types import Port
from exceptions import InvalidPort

load_dotenv()

MIN_PORT = 1024
MAX_PORT = 65535


@dataclass(frozen=True)
class Settings:
    """Settings shared by the server and the client.

    Attributes:
        host (str): Address the server listens on.
        log_level (str): Name of the default log level.
        log_file (Optional[str]): File log records are also written to. The
            server falls back to game-server.log when this is not set.
        encoding (str): Encoding of the lines sent over the wire.
    """

    host: str
    log_level: str
    log_file: Optional[str]
    encoding: str


SETTINGS = Settings(
    host=os.getenv("TOC_HOST", "0.0.0.0"),
    log_level=os.getenv("TOC_LOG_LEVEL", "INFO").upper(),
    log_file=os.getenv("TOC_LOG_FILE") or None,
    encoding=os.getenv("TOC_ENCODING", "utf-8"),
)


def validate_port(port: Port) -> Port:
    """Makes sure a listening port does not interfere with the well known ports.

    Raises:
        InvalidPort: Raised if the port is outside 1024-65535.
    """

    if not MIN_PORT <= port <= MAX_PORT:
        raise InvalidPort(port)
    return port
