"""
Screen Base
===========
Shared plumbing for the admin screens: run a backend action, turn the
outcome into a toast, and record what happened.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from ..api.errors import ArudealError
from ..notifications.notification_manager import NotificationManager
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ActionResult:
    """Outcome of one screen action"""

    action: str
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    data: Any = None
    metadata: Dict[str, Any] = field(default_factory=dict)


class Screen:
    """
    Base class for admin screens.

    Args:
        notifier: Where toasts go (a fresh manager if None)
    """

    def __init__(self, notifier: Optional[NotificationManager] = None):
        self.notifier = notifier or NotificationManager()
        self.action_history: List[Dict[str, Any]] = []

    def _record(self, result: ActionResult) -> ActionResult:
        self.action_history.append({
            "action": result.action,
            "success": result.success,
            "error": result.error,
            "timestamp": datetime.now().isoformat(),
        })
        return result

    def reject(self, action: str, message: str) -> ActionResult:
        """Refuse an action locally; nothing is sent."""
        self.notifier.error(message)
        return self._record(ActionResult(action=action, success=False, error=message))

    def run(
        self,
        action: str,
        call: Callable[[], Any],
        success_message: Optional[Callable[[Any], Optional[str]]] = None,
        error_message: Optional[str] = None,
    ) -> ActionResult:
        """
        Call the backend and report the outcome.

        Args:
            action: Name recorded in the history
            call: Zero-argument callable issuing the request(s)
            success_message: Builds the success toast from the response;
                None (or a None return) means no toast
            error_message: Replaces the error's own message in the toast

        Returns:
            ActionResult (errors are reported, never raised)
        """
        try:
            data = call()
        except ArudealError as e:
            message = error_message or str(e)
            logger.debug("%s failed: %s", action, e)
            self.notifier.error(message)
            return self._record(ActionResult(action=action, success=False, error=message))

        message = success_message(data) if success_message else None
        if message:
            self.notifier.success(message)
        return self._record(ActionResult(action=action, success=True, message=message, data=data))


def response_message(data: Any, default: str) -> str:
    """The backend's `message` field when it sent one"""
    if isinstance(data, dict) and isinstance(data.get("message"), str) and data["message"]:
        return data["message"]
    return default
