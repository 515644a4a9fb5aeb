from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..utils.security import verify_password


class UserStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"

    def toggled(self) -> "UserStatus":
        return UserStatus.INACTIVE if self is UserStatus.ACTIVE else UserStatus.ACTIVE


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    name: str
    email: str
    role: str
    status: UserStatus = UserStatus.ACTIVE
    # bcrypt hash, never serialized
    password_hash: str = Field(repr=False, exclude=True)

    def verify_password(self, plain_password: str) -> bool:
        return verify_password(plain_password, self.password_hash)
