from pydantic import BaseModel


class PermissionCreate(BaseModel):
    name: str = ""
    description: str = ""


class PermissionUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
