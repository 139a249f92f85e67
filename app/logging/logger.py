import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_run_id: ContextVar[str] = ContextVar("triage_run_id", default="-")


class _RunIdFilter(logging.Filter):
    """Stamps each record with the id of the triage run being processed."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _run_id.get()
        return True


class Log:
    """Centralized logging with structured format."""

    _logger: logging.Logger = logging.getLogger("triage")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.addFilter(_RunIdFilter())
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] [run %(run_id)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    @contextmanager
    def run_scope(cls, run_id: str) -> Iterator[None]:
        """Tag every message logged inside the block with run_id."""
        token = _run_id.set(run_id)
        try:
            yield
        finally:
            _run_id.reset(token)

    @classmethod
    def current_run_id(cls) -> str:
        return _run_id.get()

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        """Log an info message."""
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        """Log an error message."""
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        """Log a warning message."""
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        """Log a debug message."""
        cls._logger.debug(message, extra=kwargs)
