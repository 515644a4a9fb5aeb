from .notification import Notification, NotificationKind
from .permission import Permission
from .role import PermissionLevel, Role
from .user import User, UserStatus

__all__ = [
    "Notification",
    "NotificationKind",
    "Permission",
    "PermissionLevel",
    "Role",
    "User",
    "UserStatus",
]
