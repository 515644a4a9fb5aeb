from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    message: str
    kind: NotificationKind
    duration_ms: int
    created_at: datetime
