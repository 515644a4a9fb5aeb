from pydantic import BaseModel, ConfigDict


class Permission(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: str
