from __future__ import annotations

from ...models.notification import NotificationKind
from ...models.permission import Permission
from ...schemas.permission import PermissionCreate, PermissionUpdate
from .resource_service import ResourceService


class PermissionService(ResourceService[Permission, PermissionCreate, PermissionUpdate]):
    resource_name = "permission"
    create_schema = PermissionCreate
    required_fields = ("name", "description")

    text_filter_fields = frozenset({"name", "description"})
    sortable_fields = frozenset({"id", "name", "description"})

    delete_kind = NotificationKind.INFO

    created_message = "{name} permission has been successfully created."
    updated_message = "{name} permission has been successfully updated."
    deleted_message = "{name} has been removed from the system."
    invalid_message = "Both name and description are required."
    update_missing_message = "No permission selected for editing."
    not_found_message = "Permission not found."

    def _build_record(self, record_id: int, draft: PermissionCreate) -> Permission:
        return Permission(id=record_id, name=draft.name, description=draft.description)
