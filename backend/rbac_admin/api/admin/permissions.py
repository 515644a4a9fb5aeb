from fastapi import APIRouter, Depends, Query

from ...dependencies import get_permission_service
from ...models.permission import Permission
from ...schemas.operation import OperationResponse
from ...schemas.permission import PermissionCreate, PermissionUpdate
from ...schemas.projection import PermissionFilters, SortDirection
from ...services.admin import PermissionService
from .common import sort_spec, to_response

router = APIRouter(prefix="/permissions", tags=["admin-permissions"])


@router.get("", response_model=list[Permission])
async def list_permissions(
    name: str = Query("", description="Substring filter on permission name"),
    description: str = Query("", description="Substring filter on description"),
    sort_field: str | None = Query(None, description="Sort field"),
    sort_direction: SortDirection = Query("asc", description="Sort order"),
    service: PermissionService = Depends(get_permission_service),
) -> list[Permission]:
    filters = PermissionFilters(name=name, description=description)
    return service.view(filters, sort_spec(sort_field, sort_direction))


@router.get("/{permission_id}", response_model=Permission)
async def get_permission(
    permission_id: int,
    service: PermissionService = Depends(get_permission_service),
) -> Permission:
    return service.get(permission_id)


@router.post("", response_model=OperationResponse[Permission])
async def create_permission(
    payload: PermissionCreate,
    service: PermissionService = Depends(get_permission_service),
) -> OperationResponse:
    return to_response(service.create(payload), Permission)


@router.patch("/{permission_id}", response_model=OperationResponse[Permission])
async def update_permission(
    permission_id: int,
    payload: PermissionUpdate,
    service: PermissionService = Depends(get_permission_service),
) -> OperationResponse:
    return to_response(service.update(permission_id, payload), Permission)


@router.delete("/{permission_id}", response_model=OperationResponse[Permission])
async def delete_permission(
    permission_id: int,
    service: PermissionService = Depends(get_permission_service),
) -> OperationResponse:
    return to_response(service.delete(permission_id), Permission)
