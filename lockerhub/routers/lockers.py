"""Locker fleet endpoints: availability lookup and admin status override."""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from lockerhub.database import LockerStore, get_store
from lockerhub.models.enums import LockerSize
from lockerhub.schemas.common import ApiResponse
from lockerhub.schemas.locker import LockerCreate, LockerOut, LockerStatusUpdate
from lockerhub.services import locker_service
from lockerhub.utils.responses import respond

router = APIRouter()


@router.get("/lockers", response_model=ApiResponse[list[LockerOut]])
async def list_lockers(response: Response, store: LockerStore = Depends(get_store)):
    return respond(await locker_service.get_all_lockers(store), response)


@router.get("/lockers/available", response_model=ApiResponse[list[LockerOut]],
            summary="Available lockers, optionally of one size")
async def available_lockers(response: Response, size: Optional[LockerSize] = None,
                            store: LockerStore = Depends(get_store)):
    return respond(await locker_service.get_available_lockers(store, size), response)


@router.get("/lockers/{locker_id}", response_model=ApiResponse[LockerOut])
async def get_locker(locker_id: str, response: Response, store: LockerStore = Depends(get_store)):
    return respond(await locker_service.get_locker(store, locker_id), response)


@router.post("/lockers", response_model=ApiResponse[LockerOut], summary="Install a new locker")
async def create_locker(body: LockerCreate, response: Response, store: LockerStore = Depends(get_store)):
    result = await locker_service.create_locker(store, body)
    return respond(result, response, status.HTTP_201_CREATED)


@router.put("/lockers/{locker_id}/status", response_model=ApiResponse[LockerOut],
            summary="Admin override of locker status")
async def update_status(locker_id: str, body: LockerStatusUpdate, response: Response,
                        store: LockerStore = Depends(get_store)):
    return respond(await locker_service.update_locker_status(store, locker_id, body.status), response)
