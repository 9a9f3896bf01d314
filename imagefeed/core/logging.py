"""
Logging setup shared by the companion API and the terminal client.

Every module logs through ``logging.getLogger(__name__)``; only entry points
call ``configure_logging``.
"""

import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Transport libraries that log one line per request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: Union[str, int] = "INFO", *, quiet_http: bool = True) -> None:
    """Configure root logging; httpx request lines are demoted unless debugging."""
    resolved = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")

    logging.basicConfig(level=resolved, format=LOG_FORMAT, stream=sys.stdout)
    if quiet_http and resolved > logging.DEBUG:
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["LOG_FORMAT", "configure_logging"]
