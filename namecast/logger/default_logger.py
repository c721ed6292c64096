"""Default logger that defers to the host application's logging config."""

import logging
from typing import Any

from namecast.logger.interface import Logger


class DefaultLogger(Logger):
    """Propagating logger: no handlers of its own.

    Use this when namecast is embedded in an application that already
    configures the root logger (uvicorn, pytest caplog, ...).
    """

    def __init__(self, name: str = "namecast") -> None:
        self._logger = logging.getLogger(name)

    def _log(self, level: int, message: str, fields: dict) -> None:
        if fields:
            extra = " ".join(f"{key}={value}" for key, value in fields.items())
            self._logger.log(level, "%s %s", message, extra)
        else:
            self._logger.log(level, "%s", message)

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
