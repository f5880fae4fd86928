from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Delivery channel for reminders (browser push, desktop, e-mail ...)."""

    def permission_granted(self) -> bool:
        raise NotImplementedError

    def emit(self, title: str, body: str, tag: str) -> None:
        """Deliver one notification; tag de-duplicates repeats on the client."""
        raise NotImplementedError


class LoggingNotifier:
    """Default notifier: writes reminders to the application log."""

    def __init__(self, *, granted: bool = True):
        self._granted = granted

    def permission_granted(self) -> bool:
        return self._granted

    def emit(self, title: str, body: str, tag: str) -> None:
        logger.info("[%s] %s - %s", tag, title, body)
