from pydantic import BaseModel, Field

from .audit_log import AuditEntry


class DashboardOverview(BaseModel):
    total_users: int
    active_users: int
    inactive_users: int
    total_roles: int
    total_permissions: int
    recent_activities: list[AuditEntry] = Field(default_factory=list)
