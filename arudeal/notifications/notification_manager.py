"""
Notification Manager
====================
Toast-style feedback for screen actions.

Every workflow reports its outcome here instead of raising: a success
toast after a mutation, an error toast carrying the backend's message,
an info toast for local actions ("Form cleared").

Supports:
- In-memory history (what the screen shows)
- Log echo through utils.logger
- Console echo for the CLI (echo=True)
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from ..utils.logger import get_logger

logger = get_logger(__name__)


class ToastLevel(Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


_ICONS = {
    ToastLevel.SUCCESS: "✅",
    ToastLevel.ERROR: "❌",
    ToastLevel.INFO: "ℹ️ ",
}

_LOG_LEVELS = {
    ToastLevel.SUCCESS: logging.INFO,
    ToastLevel.ERROR: logging.WARNING,
    ToastLevel.INFO: logging.INFO,
}


@dataclass
class Toast:
    level: ToastLevel
    message: str
    created_at: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{_ICONS[self.level]} {self.message}"


class NotificationManager:
    """
    Collects toasts for one session.

    Args:
        echo: Also print each toast (the CLI turns this on)
    """

    def __init__(self, echo: bool = False):
        self.echo = echo
        self.history: List[Toast] = []

    def _push(self, level: ToastLevel, message: str) -> Toast:
        toast = Toast(level=level, message=message)
        self.history.append(toast)
        logger.log(_LOG_LEVELS[level], "[%s] %s", level.value, message)
        if self.echo:
            print(toast)
        return toast

    def success(self, message: str) -> Toast:
        return self._push(ToastLevel.SUCCESS, message)

    def error(self, message: str) -> Toast:
        return self._push(ToastLevel.ERROR, message)

    def info(self, message: str) -> Toast:
        return self._push(ToastLevel.INFO, message)

    @property
    def last(self) -> Optional[Toast]:
        return self.history[-1] if self.history else None

    def of_level(self, level: ToastLevel) -> List[Toast]:
        return [t for t in self.history if t.level == level]

    def clear(self):
        self.history = []
