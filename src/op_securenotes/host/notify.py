"""Notifier writing to the standard logging system."""

from __future__ import annotations

import logging
from typing import Optional

NOTIFY_LOGGER = "op_securenotes.notify"


class LoggingNotifier:
    """Notifier that forwards each notification to a logger.

    Success messages are logged at INFO level with a "[OK]" marker.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(NOTIFY_LOGGER)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def success(self, message: str) -> None:
        self._logger.info(f"[OK] {message}")

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)


__all__ = ["NOTIFY_LOGGER", "LoggingNotifier"]
