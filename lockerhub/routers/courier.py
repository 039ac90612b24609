from fastapi import APIRouter, Depends, Response

from lockerhub.database import LockerStore, get_store
from lockerhub.schemas.common import ApiResponse
from lockerhub.schemas.package import PackageOut
from lockerhub.services import courier_service
from lockerhub.utils.responses import respond

router = APIRouter()


@router.get("/courier/deliveries", response_model=ApiResponse[list[PackageOut]],
            summary="Courier work list — queued and assigned packages")
async def delivery_list(response: Response, store: LockerStore = Depends(get_store)):
    return respond(await courier_service.get_delivery_list(store), response)
