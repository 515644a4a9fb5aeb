from typing import Literal

from pydantic import BaseModel, ConfigDict

ALL_SENTINEL = "all"

SortDirection = Literal["asc", "desc"]


class SortSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    direction: SortDirection = "asc"

    @property
    def descending(self) -> bool:
        return self.direction == "desc"

    def toggled(self, field: str) -> "SortSpec":
        """Sort state after a header click on ``field``.

        Clicking the active field flips the direction, clicking any other
        field sorts by it ascending.
        """
        if field == self.field:
            return SortSpec(field=field, direction="asc" if self.descending else "desc")
        return SortSpec(field=field, direction="asc")


class FilterSet(BaseModel):
    def to_filter_map(self) -> dict[str, str]:
        return self.model_dump()


class UserFilters(FilterSet):
    username: str = ""
    name: str = ""
    email: str = ""
    role: str = ALL_SENTINEL


class RoleFilters(FilterSet):
    name: str = ""


class PermissionFilters(FilterSet):
    name: str = ""
    description: str = ""
