from fastapi import APIRouter, Depends, Query

from ...dependencies import get_console
from ...schemas.dashboard import DashboardOverview
from ...services.admin import AdminConsole
from ...services.dashboard_service import DEFAULT_RECENT_ACTIVITY_LIMIT

router = APIRouter(prefix="/dashboard", tags=["admin-dashboard"])


@router.get("", response_model=DashboardOverview)
async def dashboard_overview(
    activity_limit: int = Query(DEFAULT_RECENT_ACTIVITY_LIMIT, ge=0, le=100),
    console: AdminConsole = Depends(get_console),
) -> DashboardOverview:
    return console.dashboard.overview(activity_limit)
