"""
Admin API endpoints for user accounts.

Mutations always answer 200 with an OperationResponse; a rejected action
is reported through ``ok=false`` and the error notification, not an HTTP
error status.
"""
from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool

from ...dependencies import get_user_service
from ...schemas.operation import OperationResponse
from ...schemas.projection import ALL_SENTINEL, SortDirection, UserFilters
from ...schemas.user import UserCreate, UserRead, UserUpdate
from ...services.admin import UserService
from .common import sort_spec, to_response

router = APIRouter(prefix="/users", tags=["admin-users"])


async def _hash_off_loop(service: UserService, password: str | None) -> str | None:
    # keeps bcrypt off the event loop
    if not password:
        return None
    return await run_in_threadpool(service.hash_password, password)


@router.get("", response_model=list[UserRead])
async def list_users(
    username: str = Query("", description="Substring filter on username"),
    name: str = Query("", description="Substring filter on name"),
    email: str = Query("", description="Substring filter on email"),
    role: str = Query(ALL_SENTINEL, description="Exact role, or 'all'"),
    sort_field: str = Query("username", description="Sort field"),
    sort_direction: SortDirection = Query("asc", description="Sort order"),
    service: UserService = Depends(get_user_service),
) -> list[UserRead]:
    filters = UserFilters(username=username, name=name, email=email, role=role)
    users = service.view(filters, sort_spec(sort_field, sort_direction))
    return [UserRead.model_validate(user) for user in users]


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> UserRead:
    return UserRead.model_validate(service.get(user_id))


@router.post("", response_model=OperationResponse[UserRead])
async def create_user(
    payload: UserCreate,
    service: UserService = Depends(get_user_service),
) -> OperationResponse:
    password_hash = await _hash_off_loop(service, payload.password)
    return to_response(service.create(payload, password_hash=password_hash), UserRead)


@router.patch("/{user_id}", response_model=OperationResponse[UserRead])
async def update_user(
    user_id: int,
    payload: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> OperationResponse:
    password_hash = await _hash_off_loop(service, payload.password)
    return to_response(
        service.update(user_id, payload, password_hash=password_hash), UserRead
    )


@router.delete("/{user_id}", response_model=OperationResponse[UserRead])
async def delete_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> OperationResponse:
    return to_response(service.delete(user_id), UserRead)


@router.post("/{user_id}/status", response_model=OperationResponse[UserRead])
async def toggle_user_status(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> OperationResponse:
    return to_response(service.toggle_status(user_id), UserRead)
