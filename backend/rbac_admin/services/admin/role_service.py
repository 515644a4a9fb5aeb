from __future__ import annotations

from ...errors import NotFoundError
from ...models.notification import NotificationKind
from ...models.role import PermissionLevel, Role
from ...schemas.role import RoleCreate, RoleUpdate
from .resource_service import OperationResult, ResourceService, logger


def _toggled(levels: list[PermissionLevel], level: PermissionLevel) -> list[PermissionLevel]:
    if level in levels:
        return [existing for existing in levels if existing != level]
    return [*levels, level]


class RoleService(ResourceService[Role, RoleCreate, RoleUpdate]):
    resource_name = "role"
    create_schema = RoleCreate
    required_fields = ("name",)

    text_filter_fields = frozenset({"name"})
    sortable_fields = frozenset({"id", "name"})

    delete_kind = NotificationKind.ERROR
    notification_duration_ms = 5000

    created_message = "{name} role has been created"
    updated_message = "{name} role has been updated"
    deleted_message = "{name} role has been deleted"
    invalid_message = "Role name is required to add a new role."
    update_missing_message = "No role selected for update."
    not_found_message = "Role not found."

    def _build_record(self, record_id: int, draft: RoleCreate) -> Role:
        return Role(id=record_id, name=draft.name, permissions=list(draft.permissions))

    def toggle_permission(
        self, role_id: int, permission: PermissionLevel | str
    ) -> OperationResult[Role]:
        """Add ``permission`` to the role if absent, remove it if present.

        This is a silent mutation: no notification is pushed, not even when
        the role does not exist.

        Raises:
            ValueError: If ``permission`` is not a known permission level
        """
        level = PermissionLevel(permission)
        current = self.store.get_by_id(role_id)
        if current is None:
            logger.info("[ADMIN] toggle_permission skipped resource=role id=%s", role_id)
            return OperationResult(
                ok=False,
                error=NotFoundError(self.not_found_message, record_id=role_id),
            )

        record = current.model_copy(
            update={"permissions": _toggled(current.permissions, level)}
        )
        self.store.replace(record)
        verb = "granted" if record.has_permission(level) else "revoked"
        self._record_activity(
            "toggle_permission",
            record,
            f"{level.value} permission {verb} for {record.name} role",
            payload={"permission": level.value, "granted": record.has_permission(level)},
        )
        return OperationResult(ok=True, record=record)

    def toggle_draft_permission(self, permission: PermissionLevel | str) -> RoleCreate:
        level = PermissionLevel(permission)
        return self.update_draft(permissions=_toggled(list(self.draft.permissions), level))
