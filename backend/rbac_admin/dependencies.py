from fastapi import Depends, Request

from .services.admin import (
    AdminConsole,
    PermissionService,
    RoleService,
    UserService,
)


def get_console(request: Request) -> AdminConsole:
    return request.app.state.console


def get_user_service(console: AdminConsole = Depends(get_console)) -> UserService:
    return console.users


def get_role_service(console: AdminConsole = Depends(get_console)) -> RoleService:
    return console.roles


def get_permission_service(
    console: AdminConsole = Depends(get_console),
) -> PermissionService:
    return console.permissions
