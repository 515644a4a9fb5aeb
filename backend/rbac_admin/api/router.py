from fastapi import APIRouter

from .admin import dashboard as admin_dashboard
from .admin import notifications as admin_notifications
from .admin import permissions as admin_permissions
from .admin import roles as admin_roles
from .admin import users as admin_users

router = APIRouter(prefix="/admin")

_admin_routers = [
    admin_users.router,
    admin_roles.router,
    admin_permissions.router,
    admin_notifications.router,
    admin_dashboard.router,
]

for _router in _admin_routers:
    router.include_router(_router)
