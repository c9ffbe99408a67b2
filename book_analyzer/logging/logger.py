import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(book)s] %(message)s"

_current_book: ContextVar[str] = ContextVar("current_book", default="-")


class _BookFilter(logging.Filter):
    """Stamps each record with the file name of the book being processed."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.book = _current_book.get()
        return True


class Log:
    """Centralized logging for the analysis pipeline.

    Records go to stderr by default; stdout carries the CLI's JSON output.
    Lines emitted inside ``Log.book(name)`` are tagged with that file name.
    """

    _logger: logging.Logger = logging.getLogger("book_analyzer")
    _handler: logging.Handler | None = None

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        """Set the level and (re)attach the stream handler.

        Raises:
            ValueError: if ``log_level`` is not a logging level name.
        """
        cls._logger.setLevel(log_level.upper())
        if cls._handler is not None:
            cls._logger.removeHandler(cls._handler)
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(_BookFilter())
        cls._logger.addHandler(handler)
        cls._handler = handler

    @classmethod
    @contextmanager
    def book(cls, file_name: str) -> Iterator[None]:
        token = _current_book.set(file_name)
        try:
            yield
        finally:
            _current_book.reset(token)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, error: BaseException) -> None:
        """Log an error together with the traceback of ``error``."""
        cls._logger.error(message, exc_info=error)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
