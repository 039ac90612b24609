"""
Package endpoints: intake, queries, and the assign → deliver → pickup lifecycle.
The acting user's id arrives in the X-User-Id header, set by the identity layer.
"""

from fastapi import APIRouter, Depends, Header, Response, status

from lockerhub.database import LockerStore, get_store
from lockerhub.schemas.common import ApiResponse
from lockerhub.schemas.package import AssignRequest, PackageCreate, PackageOut, PickupRequest
from lockerhub.services import package_service
from lockerhub.utils.responses import respond

router = APIRouter()


@router.post("/packages", response_model=ApiResponse[PackageOut], summary="Register an inbound package")
async def create_package(body: PackageCreate, response: Response, store: LockerStore = Depends(get_store)):
    result = await package_service.create_package(store, body)
    return respond(result, response, status.HTTP_201_CREATED)


@router.get("/packages", response_model=ApiResponse[list[PackageOut]])
async def list_packages(response: Response, store: LockerStore = Depends(get_store)):
    return respond(await package_service.get_all_packages(store), response)


@router.get("/packages/mine", response_model=ApiResponse[list[PackageOut]],
            summary="Packages the acting user sends or receives")
async def my_packages(response: Response, x_user_id: str = Header(...),
                      store: LockerStore = Depends(get_store)):
    return respond(await package_service.get_my_packages(store, x_user_id), response)


@router.get("/packages/recipient/{recipient_id}", response_model=ApiResponse[list[PackageOut]])
async def packages_for_recipient(recipient_id: str, response: Response,
                                 store: LockerStore = Depends(get_store)):
    return respond(await package_service.get_packages_by_recipient(store, recipient_id), response)


@router.get("/packages/{package_id}", response_model=ApiResponse[PackageOut])
async def get_package(package_id: str, response: Response, store: LockerStore = Depends(get_store)):
    return respond(await package_service.get_package(store, package_id), response)


@router.post("/packages/{package_id}/assign", response_model=ApiResponse[PackageOut],
             summary="Assign a queued package to an available locker")
async def assign_locker(package_id: str, body: AssignRequest, response: Response,
                        store: LockerStore = Depends(get_store)):
    result = await package_service.assign_locker(store, package_id, body.locker_id, body.assigned_by)
    return respond(result, response)


@router.post("/packages/{package_id}/deliver", response_model=ApiResponse[PackageOut],
             summary="Mark a package delivered into its locker")
async def mark_delivered(package_id: str, response: Response, store: LockerStore = Depends(get_store)):
    return respond(await package_service.mark_delivered(store, package_id), response)


@router.post("/packages/{package_id}/pickup", response_model=ApiResponse[PackageOut],
             summary="Collect a delivered package and free its locker")
async def pickup(package_id: str, body: PickupRequest, response: Response,
                 store: LockerStore = Depends(get_store)):
    return respond(await package_service.pickup(store, package_id, body.user_id), response)
