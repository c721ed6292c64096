"""
Structured logging for namecast.

Components log an event message plus keyword fields
(``logger.info("Names extracted", kind="pdf", count=12)``). ``session_logger``
is the shared console logger; its level comes from NAMECAST_LOG_LEVEL.
Embedding applications can pass any ``Logger`` implementation instead,
for example ``DefaultLogger`` to route records through their own handlers.
"""

import logging
import os

from .interface import Logger
from .default_logger import DefaultLogger
from .console_logger import ConsoleLogger


def _level_from_env() -> int:
    name = os.environ.get("NAMECAST_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


# Shared logger instance for modules that just need basic console logging
session_logger: Logger = ConsoleLogger(level=_level_from_env())

__all__ = [
    "Logger",
    "DefaultLogger",
    "ConsoleLogger",
    "session_logger",
]
