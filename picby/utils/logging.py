"""
PicBy Structured Logging
Centralized loguru configuration with per-scan context binding.
"""
import sys
from typing import Dict, Any, Optional

from loguru import logger

from picby.config import config


class StructuredLogger:
    """Structured logger for PicBy classification and folder scans."""

    def __init__(self, **context: Any):
        """Initialize structured logger, optionally bound to fixed context."""
        self._context = context
        if not context:
            self._configure_logger()

    def _configure_logger(self):
        """Configure loguru sink and format once for the process."""
        logger.remove()
        logger.add(
            sys.stdout,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message} | {extra}",
            level=config.LOG_LEVEL,
            serialize=False  # Set to True for JSON output
        )

    def bind(self, **context: Any) -> "StructuredLogger":
        """Child logger that adds ``context`` to every record (e.g. a scan's request id)."""
        return StructuredLogger(**{**self._context, **context})

    def _emit(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        fields = {**self._context, **(extra or {})}
        logger.bind(**fields).log(level, message)

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
    """Get or create global logger instance."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger
