from .notifications import ExpiryTimer, NotificationQueue

__all__ = ["ExpiryTimer", "NotificationQueue"]
