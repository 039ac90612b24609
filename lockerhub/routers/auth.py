"""Identity boundary: registration and sign-in. No tokens are issued."""

from fastapi import APIRouter, Depends, Response, status

from lockerhub.database import LockerStore, get_store
from lockerhub.schemas.common import ApiResponse
from lockerhub.schemas.user import LoginRequest, UserOut, UserRegister
from lockerhub.services import user_service
from lockerhub.utils.responses import respond

router = APIRouter()


@router.post("/auth/register", response_model=ApiResponse[UserOut], summary="Register a recipient account")
async def register(body: UserRegister, response: Response, store: LockerStore = Depends(get_store)):
    result = await user_service.register_user(store, body)
    return respond(result, response, status.HTTP_201_CREATED)


@router.post("/auth/login", response_model=ApiResponse[UserOut], summary="Sign in by email")
async def login(body: LoginRequest, response: Response, store: LockerStore = Depends(get_store)):
    return respond(await user_service.login(store, body.email), response)
