from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PermissionLevel(str, Enum):
    READ = "Read"
    WRITE = "Write"
    DELETE = "Delete"


def dedupe_levels(levels: list[PermissionLevel]) -> list[PermissionLevel]:
    """Collapse duplicates, keeping the first occurrence of each level."""
    return list(dict.fromkeys(levels))


class Role(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    permissions: list[PermissionLevel] = Field(default_factory=list)

    @field_validator("permissions")
    @classmethod
    def _unique_permissions(cls, value: list[PermissionLevel]) -> list[PermissionLevel]:
        return dedupe_levels(value)

    def has_permission(self, level: PermissionLevel) -> bool:
        return level in self.permissions
