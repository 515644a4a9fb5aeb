from pydantic import BaseModel, Field, field_validator

from ..models.role import PermissionLevel, dedupe_levels


class RoleCreate(BaseModel):
    name: str = ""
    permissions: list[PermissionLevel] = Field(default_factory=list)

    @field_validator("permissions")
    @classmethod
    def _unique_permissions(cls, value: list[PermissionLevel]) -> list[PermissionLevel]:
        return dedupe_levels(value)


class RoleUpdate(BaseModel):
    name: str | None = None
    permissions: list[PermissionLevel] | None = None

    @field_validator("permissions")
    @classmethod
    def _unique_permissions(
        cls, value: list[PermissionLevel] | None
    ) -> list[PermissionLevel] | None:
        return None if value is None else dedupe_levels(value)
