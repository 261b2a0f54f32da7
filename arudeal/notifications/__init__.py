"""Toast notifications"""

from .notification_manager import NotificationManager, Toast, ToastLevel

__all__ = ["NotificationManager", "Toast", "ToastLevel"]
