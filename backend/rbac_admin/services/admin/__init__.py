from .console import AdminConsole, create_admin_console
from .permission_service import PermissionService
from .resource_service import OperationResult, ResourceService
from .role_service import RoleService
from .user_service import UserService

__all__ = [
    "AdminConsole",
    "OperationResult",
    "PermissionService",
    "ResourceService",
    "RoleService",
    "UserService",
    "create_admin_console",
]
