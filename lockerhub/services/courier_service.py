# lockerhub/services/courier_service.py
"""Courier work queue: packages still waiting for a locker or for delivery."""

from lockerhub.database import LockerStore
from lockerhub.models.enums import PackageStatus
from lockerhub.models.package import Package
from lockerhub.schemas.package import PackageOut
from lockerhub.services.base import engine_operation, snapshot

DELIVERY_LIST_STATUSES = (PackageStatus.QUEUED.value, PackageStatus.ASSIGNED.value)


@engine_operation
async def get_delivery_list(store: LockerStore) -> list[PackageOut]:
    with store.transaction() as db:
        rows = (
            db.query(Package)
            .filter(Package.status.in_(DELIVERY_LIST_STATUSES))
            .order_by(Package.created_at)
            .all()
        )
        return snapshot(PackageOut, rows)
