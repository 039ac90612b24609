"""User administration endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Response

from lockerhub.database import LockerStore, get_store
from lockerhub.models.enums import UserRole
from lockerhub.schemas.common import ApiResponse
from lockerhub.schemas.user import RoleUpdate, UserOut
from lockerhub.services import user_service
from lockerhub.utils.responses import respond

router = APIRouter()


@router.get("/users", response_model=ApiResponse[list[UserOut]], summary="List users, optionally by role")
async def list_users(response: Response, role: Optional[UserRole] = None,
                     store: LockerStore = Depends(get_store)):
    if role:
        result = await user_service.get_users_by_role(store, role)
    else:
        result = await user_service.get_all_users(store)
    return respond(result, response)


@router.get("/users/{user_id}", response_model=ApiResponse[UserOut])
async def get_user(user_id: str, response: Response, store: LockerStore = Depends(get_store)):
    return respond(await user_service.get_user(store, user_id), response)


@router.put("/users/{user_id}/role", response_model=ApiResponse[UserOut], summary="Change a user's role")
async def update_role(user_id: str, body: RoleUpdate, response: Response,
                      store: LockerStore = Depends(get_store)):
    return respond(await user_service.update_user_role(store, user_id, body.role), response)


@router.delete("/users/{user_id}", response_model=ApiResponse[None], summary="Delete a user (no cascade)")
async def delete_user(user_id: str, response: Response, store: LockerStore = Depends(get_store)):
    return respond(await user_service.delete_user(store, user_id), response)
