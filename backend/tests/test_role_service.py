import pytest

from rbac_admin.config import Settings
from rbac_admin.errors import NotFoundError
from rbac_admin.models.notification import NotificationKind
from rbac_admin.models.role import PermissionLevel
from rbac_admin.schemas.projection import RoleFilters, SortSpec
from rbac_admin.schemas.role import RoleCreate, RoleUpdate
from rbac_admin.services.admin import create_admin_console

READ = PermissionLevel.READ
WRITE = PermissionLevel.WRITE
DELETE = PermissionLevel.DELETE


@pytest.mark.anyio
async def test_create_role_without_permissions(console):
    result = console.roles.create(RoleCreate(name="Auditor"))

    assert result.ok
    assert result.record.id == 4
    assert result.record.permissions == []
    assert result.notification.kind is NotificationKind.SUCCESS
    assert result.notification.message == "Auditor role has been created"


@pytest.mark.anyio
async def test_role_notifications_last_five_seconds(console):
    result = console.roles.create(RoleCreate(name="Auditor"))

    assert result.notification.duration_ms == 5000


@pytest.mark.anyio
async def test_create_role_requires_name(console):
    result = console.roles.create(RoleCreate(permissions=[READ]))

    assert not result.ok
    assert result.notification.kind is NotificationKind.ERROR
    assert result.notification.message == "Role name is required to add a new role."
    assert len(console.roles.list_all()) == 3


def test_duplicate_permissions_collapse() -> None:
    draft = RoleCreate(name="Ops", permissions=[READ, WRITE, READ])

    assert draft.permissions == [READ, WRITE]


@pytest.mark.anyio
async def test_toggle_permission_twice_is_identity(console):
    before = console.roles.get(3)

    first = console.roles.toggle_permission(3, WRITE)
    assert first.ok
    assert first.record.permissions == [READ, WRITE]

    second = console.roles.toggle_permission(3, "Write")
    assert second.record.permissions == before.permissions
    assert console.roles.get(3) == before


@pytest.mark.anyio
async def test_toggle_permission_is_silent(console):
    result = console.roles.toggle_permission(1, DELETE)

    assert result.ok
    assert result.notification is None
    assert not result.record.has_permission(DELETE)
    assert len(console.notifications) == 0


@pytest.mark.anyio
async def test_toggle_permission_on_missing_role_is_silent_noop(console):
    before = console.roles.list_all()

    result = console.roles.toggle_permission(99, READ)

    assert not result.ok
    assert isinstance(result.error, NotFoundError)
    assert result.notification is None
    assert len(console.notifications) == 0
    assert console.roles.list_all() == before


@pytest.mark.anyio
async def test_toggle_unknown_permission_raises(console):
    with pytest.raises(ValueError):
        console.roles.toggle_permission(1, "Execute")


@pytest.mark.anyio
async def test_toggle_draft_permission(console):
    roles = console.roles
    roles.update_draft(name="Reviewer")

    roles.toggle_draft_permission(READ)
    roles.toggle_draft_permission(WRITE)
    roles.toggle_draft_permission(READ)

    assert roles.draft.permissions == [WRITE]
    result = roles.create()
    assert result.record.permissions == [WRITE]


@pytest.mark.anyio
async def test_update_role_permissions(console):
    result = console.roles.update(2, RoleUpdate(permissions=[READ, READ]))

    assert result.ok
    assert result.record.name == "Editor"
    assert result.record.permissions == [READ]
    assert result.notification.message == "Editor role has been updated"


@pytest.mark.anyio
async def test_update_missing_role(console):
    result = console.roles.update(7, RoleUpdate(name="Nope"))

    assert not result.ok
    assert result.notification.message == "No role selected for update."


@pytest.mark.anyio
async def test_delete_role_uses_error_kind(console):
    result = console.roles.delete(2)

    assert result.ok
    assert result.notification.kind is NotificationKind.ERROR
    assert result.notification.message == "Editor role has been deleted"
    assert [role.id for role in console.roles.list_all()] == [1, 3]


@pytest.mark.anyio
async def test_normalized_delete_uses_info_kind():
    console = create_admin_console(
        Settings(password_hash_rounds=4, normalize_delete_notifications=True)
    )
    try:
        role_result = console.roles.delete(1)
        user_result = console.users.delete(1)

        assert role_result.notification.kind is NotificationKind.INFO
        assert user_result.notification.kind is NotificationKind.INFO
    finally:
        await console.aclose()


@pytest.mark.anyio
async def test_role_view_sorted_by_name(console):
    result = console.roles.view(RoleFilters(), SortSpec(field="name"))

    assert [role.name for role in result] == ["Admin", "Editor", "Viewer"]
    assert [role.name for role in console.roles.view(RoleFilters(name="it"))] == ["Editor"]
