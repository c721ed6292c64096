"""Logger interface.

Every component takes a Logger and calls it with a short message plus
structured keyword fields:

    logger.info("Generation completed", session_id=sid, processed=10)
"""

from abc import ABC, abstractmethod
from typing import Any


class Logger(ABC):
    """Abstract structured logger."""

    @abstractmethod
    def debug(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def info(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def warning(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def error(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def critical(self, message: str, **kwargs: Any) -> None:
        pass
