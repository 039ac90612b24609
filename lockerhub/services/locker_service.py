# lockerhub/services/locker_service.py
"""
Locker fleet: listing, availability lookup, and administration.
update_locker_status is an admin override; by default it does not look at
the packages referencing the locker (set STRICT_ADMIN_OVERRIDES to refuse
overrides that contradict package state).
"""

from typing import Optional

from lockerhub.config import settings
from lockerhub.database import LockerStore
from lockerhub.errors import ConflictError, InvalidStateError
from lockerhub.models.enums import IN_FLIGHT_STATUSES, LockerSize, LockerStatus
from lockerhub.models.locker import Locker
from lockerhub.models.package import Package
from lockerhub.schemas.locker import LockerCreate, LockerOut
from lockerhub.services.base import coerce_enum, engine_operation, load_or_raise, snapshot
from lockerhub.utils.clock import utcnow
from lockerhub.utils.ids import new_id
from lockerhub.utils.logger import get_logger

logger = get_logger(__name__)


@engine_operation
async def get_all_lockers(store: LockerStore) -> list[LockerOut]:
    with store.transaction() as db:
        return snapshot(LockerOut, db.query(Locker).order_by(Locker.locker_number).all())


@engine_operation
async def get_locker(store: LockerStore, locker_id: str) -> LockerOut:
    with store.transaction() as db:
        return LockerOut.model_validate(load_or_raise(db, Locker, locker_id, "Locker"))


@engine_operation
async def get_available_lockers(store: LockerStore, size: Optional[LockerSize] = None) -> list[LockerOut]:
    with store.transaction() as db:
        q = db.query(Locker).filter(Locker.status == LockerStatus.AVAILABLE.value)
        if size:
            q = q.filter(Locker.size == coerce_enum(LockerSize, size, "locker size").value)
        return snapshot(LockerOut, q.order_by(Locker.locker_number).all())


@engine_operation
async def create_locker(store: LockerStore, data: LockerCreate) -> LockerOut:
    with store.transaction() as db:
        existing = db.query(Locker).filter(Locker.locker_number == data.locker_number).first()
        if existing:
            raise ConflictError(f"Locker {data.locker_number} already exists")

        now = utcnow()
        locker = Locker(
            id=new_id(),
            locker_number=data.locker_number,
            size=data.size.value,
            status=LockerStatus.AVAILABLE.value,
            location=data.location,
            created_at=now,
            updated_at=now,
        )
        db.add(locker)
        db.flush()
        logger.info(f"[Locker] {locker.locker_number} created ({locker.size}) at {locker.location}")
        return LockerOut.model_validate(locker)


def _check_override(db, locker: Locker, new_status: LockerStatus):
    in_flight = (
        db.query(Package)
        .filter(Package.locker_id == locker.id, Package.status.in_(IN_FLIGHT_STATUSES))
        .first()
    )
    if in_flight and new_status != LockerStatus.OCCUPIED:
        raise InvalidStateError(
            f"Locker {locker.locker_number} holds package {in_flight.tracking_number} ({in_flight.status})"
        )
    if not in_flight and new_status == LockerStatus.OCCUPIED:
        raise InvalidStateError(f"Locker {locker.locker_number} holds no package")


@engine_operation
async def update_locker_status(store: LockerStore, locker_id: str, status: LockerStatus) -> LockerOut:
    new_status = coerce_enum(LockerStatus, status, "locker status")
    with store.transaction() as db:
        locker = load_or_raise(db, Locker, locker_id, "Locker")
        if settings.STRICT_ADMIN_OVERRIDES:
            _check_override(db, locker, new_status)

        previous = locker.status
        locker.status = new_status.value
        locker.updated_at = utcnow()
        db.flush()
        logger.info(f"[Locker] {locker.locker_number} status override: {previous} → {locker.status}")
        return LockerOut.model_validate(locker)
