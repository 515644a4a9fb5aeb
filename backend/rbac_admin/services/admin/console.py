from __future__ import annotations

import logging
from dataclasses import dataclass

from ...background.notifications import NotificationQueue
from ...config import Settings
from ...crud.store import ResourceStore
from ...models.permission import Permission
from ...models.role import Role
from ...models.user import User
from ...seed import default_permissions, default_roles, default_users
from ..audit import AuditService
from ..dashboard_service import DashboardService
from .permission_service import PermissionService
from .role_service import RoleService
from .user_service import UserService

logger = logging.getLogger("rbac_admin.admin")


@dataclass
class AdminConsole:
    """Everything one admin session owns: stores, controllers and the shared queue."""

    notifications: NotificationQueue
    audit: AuditService
    users: UserService
    roles: RoleService
    permissions: PermissionService
    dashboard: DashboardService

    async def aclose(self) -> None:
        await self.notifications.aclose()


def create_admin_console(
    settings: Settings,
    *,
    users: list[User] | None = None,
    roles: list[Role] | None = None,
    permissions: list[Permission] | None = None,
) -> AdminConsole:
    """Build an isolated console.

    Explicit ``users``/``roles``/``permissions`` win over the demo seed; when
    omitted the demo data is loaded if ``settings.seed_demo_data`` is set and
    the collection starts empty otherwise.
    """
    seed = settings.seed_demo_data
    if users is None:
        users = default_users(settings.password_hash_rounds) if seed else []
    if roles is None:
        roles = default_roles() if seed else []
    if permissions is None:
        permissions = default_permissions() if seed else []

    notifications = NotificationQueue(settings.notification_duration_ms)
    audit = AuditService(settings.activity_log_size)
    normalize = settings.normalize_delete_notifications

    user_service = UserService(
        ResourceStore(users),
        notifications,
        audit,
        normalize_delete_notifications=normalize,
        hash_rounds=settings.password_hash_rounds,
    )
    role_service = RoleService(
        ResourceStore(roles),
        notifications,
        audit,
        normalize_delete_notifications=normalize,
    )
    permission_service = PermissionService(
        ResourceStore(permissions),
        notifications,
        audit,
        normalize_delete_notifications=normalize,
    )

    logger.info(
        "Admin console ready users=%d roles=%d permissions=%d",
        len(users),
        len(roles),
        len(permissions),
    )
    return AdminConsole(
        notifications=notifications,
        audit=audit,
        users=user_service,
        roles=role_service,
        permissions=permission_service,
        dashboard=DashboardService(user_service, role_service, permission_service, audit),
    )
