from typing import Generic, TypeVar

from pydantic import BaseModel

from ..models.notification import Notification

RecordT = TypeVar("RecordT")


class OperationResponse(BaseModel, Generic[RecordT]):
    ok: bool
    record: RecordT | None = None
    notification: Notification | None = None


class DismissResponse(BaseModel):
    id: int
    dismissed: bool
