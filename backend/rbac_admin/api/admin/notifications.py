from fastapi import APIRouter, Depends

from ...dependencies import get_console
from ...models.notification import Notification
from ...schemas.operation import DismissResponse
from ...services.admin import AdminConsole

router = APIRouter(prefix="/notifications", tags=["admin-notifications"])


@router.get("", response_model=list[Notification])
async def list_notifications(
    console: AdminConsole = Depends(get_console),
) -> list[Notification]:
    return console.notifications.list_all()


@router.delete("/{notification_id}", response_model=DismissResponse)
async def dismiss_notification(
    notification_id: int,
    console: AdminConsole = Depends(get_console),
) -> DismissResponse:
    dismissed = console.notifications.dismiss(notification_id)
    return DismissResponse(id=notification_id, dismissed=dismissed)
