from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from src.context import get_user_store
from src.crud.users import UserStore
from src.schemas.user import UserCreate, UserListResponse, UserRead


router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserRead,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_user_endpoint(
    payload: UserCreate,
    store: UserStore = Depends(get_user_store),
) -> UserRead:
    return await store.create(name=payload.name, email=payload.email)


@router.get("", response_model=UserListResponse, response_model_exclude_none=True)
async def list_users_endpoint(
    # Raw strings: junk or non-positive values fall back to the defaults instead of failing.
    page: str | None = Query(None, description="1-based page number (default 1)"),
    limit: str | None = Query(None, description="Page size (default 10)"),
    store: UserStore = Depends(get_user_store),
) -> UserListResponse:
    items, pagination = await store.list(page=page, limit=limit)
    return UserListResponse(data=items, pagination=pagination)


@router.get("/active", response_model=list[UserRead], response_model_exclude_none=True)
async def list_active_users_endpoint(
    store: UserStore = Depends(get_user_store),
) -> list[UserRead]:
    return await store.list_active()


@router.get("/{user_id}", response_model=UserRead, response_model_exclude_none=True)
async def get_user_endpoint(
    user_id: str,
    store: UserStore = Depends(get_user_store),
) -> UserRead:
    return await store.get(user_id)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_endpoint(
    user_id: str,
    store: UserStore = Depends(get_user_store),
) -> Response:
    await store.delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
