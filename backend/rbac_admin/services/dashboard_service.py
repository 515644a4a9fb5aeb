from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.user import UserStatus
from ..schemas.dashboard import DashboardOverview

if TYPE_CHECKING:
    from .admin.permission_service import PermissionService
    from .admin.role_service import RoleService
    from .admin.user_service import UserService
    from .audit import AuditService

DEFAULT_RECENT_ACTIVITY_LIMIT = 5


class DashboardService:
    """Summary counters and the recent activity feed for the landing page."""

    def __init__(
        self,
        users: UserService,
        roles: RoleService,
        permissions: PermissionService,
        audit: AuditService,
    ) -> None:
        self.users = users
        self.roles = roles
        self.permissions = permissions
        self.audit = audit

    def overview(self, activity_limit: int = DEFAULT_RECENT_ACTIVITY_LIMIT) -> DashboardOverview:
        active = self.users.count_by_status(UserStatus.ACTIVE)
        total_users = len(self.users.store)
        return DashboardOverview(
            total_users=total_users,
            active_users=active,
            inactive_users=total_users - active,
            total_roles=len(self.roles.store),
            total_permissions=len(self.permissions.store),
            recent_activities=self.audit.recent(activity_limit),
        )
