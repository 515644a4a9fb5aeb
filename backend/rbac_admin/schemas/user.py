from pydantic import BaseModel, ConfigDict

from ..models.user import UserStatus


class UserBase(BaseModel):
    username: str = ""
    name: str = ""
    email: str = ""
    role: str = ""


class UserCreate(UserBase):
    password: str = ""


class UserUpdate(BaseModel):
    username: str | None = None
    name: str | None = None
    email: str | None = None
    role: str | None = None
    status: UserStatus | None = None
    # empty keeps the current password
    password: str | None = None


class UserRead(UserBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: UserStatus
