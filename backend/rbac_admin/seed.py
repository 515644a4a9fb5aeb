"""
Demo data for a fresh admin console.

These are the accounts, roles and permissions the dashboard starts with
when SEED_DEMO_DATA is enabled. Passwords are hashed at load time and are
only meant for local demos.
"""
from __future__ import annotations

from .models.permission import Permission
from .models.role import PermissionLevel, Role
from .models.user import User, UserStatus
from .utils.security import DEFAULT_HASH_ROUNDS, hash_password

DEFAULT_USERS = [
    {
        "id": 1,
        "username": "johndoe",
        "name": "John Doe",
        "email": "john@example.com",
        "password": "password123",
        "role": "Admin",
        "status": UserStatus.ACTIVE,
    },
    {
        "id": 2,
        "username": "janesmith",
        "name": "Jane Smith",
        "email": "jane@example.com",
        "password": "password456",
        "role": "Editor",
        "status": UserStatus.ACTIVE,
    },
    {
        "id": 3,
        "username": "bobjohnson",
        "name": "Bob Johnson",
        "email": "bob@example.com",
        "password": "password789",
        "role": "Viewer",
        "status": UserStatus.INACTIVE,
    },
]

DEFAULT_ROLES = [
    {
        "id": 1,
        "name": "Admin",
        "permissions": [PermissionLevel.READ, PermissionLevel.WRITE, PermissionLevel.DELETE],
    },
    {"id": 2, "name": "Editor", "permissions": [PermissionLevel.READ, PermissionLevel.WRITE]},
    {"id": 3, "name": "Viewer", "permissions": [PermissionLevel.READ]},
]

DEFAULT_PERMISSIONS = [
    {"id": 1, "name": "Read", "description": "Can view content"},
    {"id": 2, "name": "Write", "description": "Can create and edit content"},
    {"id": 3, "name": "Delete", "description": "Can remove content"},
]


def default_users(hash_rounds: int = DEFAULT_HASH_ROUNDS) -> list[User]:
    users = []
    for entry in DEFAULT_USERS:
        fields = {key: value for key, value in entry.items() if key != "password"}
        users.append(
            User(**fields, password_hash=hash_password(entry["password"], hash_rounds))
        )
    return users


def default_roles() -> list[Role]:
    return [Role(**entry) for entry in DEFAULT_ROLES]


def default_permissions() -> list[Permission]:
    return [Permission(**entry) for entry in DEFAULT_PERMISSIONS]
