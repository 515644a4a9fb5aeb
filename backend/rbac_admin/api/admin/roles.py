from fastapi import APIRouter, Depends, Query

from ...dependencies import get_role_service
from ...models.role import PermissionLevel, Role
from ...schemas.operation import OperationResponse
from ...schemas.projection import RoleFilters, SortDirection
from ...schemas.role import RoleCreate, RoleUpdate
from ...services.admin import RoleService
from .common import sort_spec, to_response

router = APIRouter(prefix="/roles", tags=["admin-roles"])


@router.get("", response_model=list[Role])
async def list_roles(
    name: str = Query("", description="Substring filter on role name"),
    sort_field: str | None = Query(None, description="Sort field"),
    sort_direction: SortDirection = Query("asc", description="Sort order"),
    service: RoleService = Depends(get_role_service),
) -> list[Role]:
    return service.view(RoleFilters(name=name), sort_spec(sort_field, sort_direction))


@router.get("/{role_id}", response_model=Role)
async def get_role(
    role_id: int,
    service: RoleService = Depends(get_role_service),
) -> Role:
    return service.get(role_id)


@router.post("", response_model=OperationResponse[Role])
async def create_role(
    payload: RoleCreate,
    service: RoleService = Depends(get_role_service),
) -> OperationResponse:
    return to_response(service.create(payload), Role)


@router.patch("/{role_id}", response_model=OperationResponse[Role])
async def update_role(
    role_id: int,
    payload: RoleUpdate,
    service: RoleService = Depends(get_role_service),
) -> OperationResponse:
    return to_response(service.update(role_id, payload), Role)


@router.delete("/{role_id}", response_model=OperationResponse[Role])
async def delete_role(
    role_id: int,
    service: RoleService = Depends(get_role_service),
) -> OperationResponse:
    return to_response(service.delete(role_id), Role)


@router.post("/{role_id}/permissions/{permission}", response_model=OperationResponse[Role])
async def toggle_role_permission(
    role_id: int,
    permission: PermissionLevel,
    service: RoleService = Depends(get_role_service),
) -> OperationResponse:
    """Grant or revoke one permission level; never produces a notification."""
    return to_response(service.toggle_permission(role_id, permission), Role)
