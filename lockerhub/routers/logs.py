"""Audit trail endpoints (read only)."""

from typing import Optional

from fastapi import APIRouter, Depends, Response

from lockerhub.database import LockerStore, get_store
from lockerhub.schemas.audit_log import AssignmentLogOut, PickupLogOut
from lockerhub.schemas.common import ApiResponse
from lockerhub.services import log_service
from lockerhub.utils.responses import respond

router = APIRouter()


@router.get("/logs/pickups", response_model=ApiResponse[list[PickupLogOut]])
async def pickup_logs(response: Response, user_id: Optional[str] = None,
                      store: LockerStore = Depends(get_store)):
    if user_id:
        result = await log_service.get_pickup_logs_by_user(store, user_id)
    else:
        result = await log_service.get_pickup_logs(store)
    return respond(result, response)


@router.get("/logs/assignments", response_model=ApiResponse[list[AssignmentLogOut]])
async def assignment_logs(response: Response, user_id: Optional[str] = None,
                          store: LockerStore = Depends(get_store)):
    return respond(await log_service.get_assignment_logs(store, user_id), response)
