"""Console logger backed by the standard logging module."""

import logging
import sys
from typing import Any

from namecast.logger.interface import Logger


def _format_fields(fields: dict) -> str:
    if not fields:
        return ""
    return " " + " ".join(f"{key}={value}" for key, value in fields.items())


class ConsoleLogger(Logger):
    """Writes ``message key=value ...`` lines to stderr."""

    def __init__(self, name: str = "namecast", level: int = logging.INFO) -> None:
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False
        if not self._logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
            self._logger.addHandler(handler)

    def _log(self, level: int, message: str, fields: dict) -> None:
        self._logger.log(level, "%s%s", message, _format_fields(fields))

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, kwargs)
