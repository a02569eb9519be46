"""
Color.io Structured Logging
Centralized loguru configuration with request-scoped context.
"""
import sys
from typing import Dict, Any, Optional

from loguru import logger

from colorio.config import config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message} | {extra}"


def configure_logging(level: Optional[str] = None, serialize: Optional[bool] = None) -> None:
    """Replace loguru's default sink with the service's stdout sink."""
    logger.remove()
    logger.add(
        sys.stdout,
        format=LOG_FORMAT,
        level=level or config.LOG_LEVEL,
        serialize=config.LOG_JSON if serialize is None else serialize,
    )


class StructuredLogger:
    """
    Thin wrapper over loguru that attaches structured fields.

    Fields passed at construction are bound to every record; ``extra`` adds
    per-call fields on top.
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        self._context = dict(context or {})

    def bind(self, **fields: Any) -> "StructuredLogger":
        """New logger carrying ``fields`` in addition to the current context."""
        return StructuredLogger({**self._context, **fields})

    def for_request(self, request_id: str, endpoint: str) -> "StructuredLogger":
        return self.bind(request_id=request_id, endpoint=endpoint)

    def _emit(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        fields = {**self._context, **(extra or {})}
        target = logger.bind(**fields) if fields else logger
        target.log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("ERROR", message, extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("DEBUG", message, extra)


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create the service logger, configuring the sink on first use."""
    global _logger
    if _logger is None:
        configure_logging()
        _logger = StructuredLogger({"service": "colorio"})
    return _logger
