"""Locker session endpoints."""

from fastapi import APIRouter, Depends, Header, Response, status

from lockerhub.database import LockerStore, get_store
from lockerhub.schemas.common import ApiResponse
from lockerhub.schemas.session import SessionCreate, SessionOut
from lockerhub.services import session_service
from lockerhub.utils.responses import respond

router = APIRouter()


@router.get("/sessions", response_model=ApiResponse[list[SessionOut]])
async def list_sessions(response: Response, store: LockerStore = Depends(get_store)):
    return respond(await session_service.get_all_sessions(store), response)


@router.get("/sessions/active", response_model=ApiResponse[list[SessionOut]])
async def active_sessions(response: Response, store: LockerStore = Depends(get_store)):
    return respond(await session_service.get_active_sessions(store), response)


@router.get("/sessions/mine", response_model=ApiResponse[list[SessionOut]])
async def my_sessions(response: Response, x_user_id: str = Header(...),
                      store: LockerStore = Depends(get_store)):
    return respond(await session_service.get_my_sessions(store, x_user_id), response)


@router.get("/sessions/mine/active", response_model=ApiResponse[list[SessionOut]])
async def my_active_sessions(response: Response, x_user_id: str = Header(...),
                             store: LockerStore = Depends(get_store)):
    return respond(await session_service.get_my_active_sessions(store, x_user_id), response)


@router.get("/sessions/user/{user_id}", response_model=ApiResponse[list[SessionOut]])
async def sessions_by_user(user_id: str, response: Response, store: LockerStore = Depends(get_store)):
    return respond(await session_service.get_sessions_by_user(store, user_id), response)


@router.post("/sessions", response_model=ApiResponse[SessionOut], summary="Open a locker session")
async def create_session(body: SessionCreate, response: Response, store: LockerStore = Depends(get_store)):
    result = await session_service.create_session(
        store, body.user_id, body.locker_id, body.session_type, body.package_id,
    )
    return respond(result, response, status.HTTP_201_CREATED)


@router.put("/sessions/{session_id}/complete", response_model=ApiResponse[SessionOut])
async def complete_session(session_id: str, response: Response, store: LockerStore = Depends(get_store)):
    return respond(await session_service.complete_session(store, session_id), response)
