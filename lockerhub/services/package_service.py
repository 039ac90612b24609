# lockerhub/services/package_service.py
"""
Package lifecycle: intake, locker assignment, delivery, and pickup.

    queued --assign--> assigned --deliver--> delivered --pickup--> picked_up

assign and pickup change a package and a locker together and append one
audit row; both happen inside one store transaction, so a rejected or
failed call leaves package, locker and logs untouched.
"""

from typing import Optional

from sqlalchemy import or_

from lockerhub.config import settings
from lockerhub.database import LockerStore
from lockerhub.errors import InvalidStateError
from lockerhub.models.audit_log import AssignmentLog, PickupLog
from lockerhub.models.enums import LockerStatus, PackageStatus
from lockerhub.models.locker import Locker
from lockerhub.models.package import Package
from lockerhub.schemas.package import PackageCreate, PackageOut
from lockerhub.services.base import engine_operation, load_or_raise, snapshot
from lockerhub.services.identity_service import IdentityVerifier, stub_verifier
from lockerhub.utils.clock import utcnow
from lockerhub.utils.ids import new_id, new_tracking_number
from lockerhub.utils.logger import get_logger

logger = get_logger(__name__)


# ── Intake ───────────────────────────────────────────────────────────────────

@engine_operation
async def create_package(store: LockerStore, data: PackageCreate) -> PackageOut:
    now = utcnow()
    with store.transaction() as db:
        pkg = Package(
            id=new_id(),
            tracking_number=new_tracking_number(),
            sender_id=data.sender_id,
            recipient_id=data.recipient_id,
            recipient_name=data.recipient_name,
            recipient_email=data.recipient_email,
            recipient_phone=data.recipient_phone,
            status=PackageStatus.QUEUED.value,
            size=data.size.value,
            description=data.description,
            created_at=now,
            updated_at=now,
        )
        db.add(pkg)
        db.flush()
        logger.info(f"[Intake] {pkg.tracking_number} queued for recipient {pkg.recipient_id} (size={pkg.size})")
        return PackageOut.model_validate(pkg)


# ── Queries ──────────────────────────────────────────────────────────────────

@engine_operation
async def get_all_packages(store: LockerStore) -> list[PackageOut]:
    with store.transaction() as db:
        return snapshot(PackageOut, db.query(Package).order_by(Package.created_at).all())


@engine_operation
async def get_package(store: LockerStore, package_id: str) -> PackageOut:
    with store.transaction() as db:
        return PackageOut.model_validate(load_or_raise(db, Package, package_id, "Package"))


@engine_operation
async def get_my_packages(store: LockerStore, user_id: str) -> list[PackageOut]:
    """Packages the user sends or receives."""
    with store.transaction() as db:
        rows = (
            db.query(Package)
            .filter(or_(Package.recipient_id == user_id, Package.sender_id == user_id))
            .order_by(Package.created_at)
            .all()
        )
        return snapshot(PackageOut, rows)


@engine_operation
async def get_packages_by_recipient(store: LockerStore, recipient_id: str) -> list[PackageOut]:
    with store.transaction() as db:
        rows = (
            db.query(Package)
            .filter(Package.recipient_id == recipient_id)
            .order_by(Package.created_at)
            .all()
        )
        return snapshot(PackageOut, rows)


# ── Transitions ──────────────────────────────────────────────────────────────

@engine_operation
async def assign_locker(store: LockerStore, package_id: str, locker_id: str, assigned_by: str) -> PackageOut:
    with store.transaction() as db:
        pkg = load_or_raise(db, Package, package_id, "Package")
        locker = load_or_raise(db, Locker, locker_id, "Locker")

        if locker.status != LockerStatus.AVAILABLE.value:
            raise InvalidStateError("Locker not available")
        if pkg.status != PackageStatus.QUEUED.value or pkg.locker_id is not None:
            raise InvalidStateError(f"Package is not queued (status: {pkg.status})")

        now = utcnow()
        pkg.locker_id = locker.id
        pkg.status = PackageStatus.ASSIGNED.value
        pkg.assigned_at = now
        pkg.updated_at = now

        locker.status = LockerStatus.OCCUPIED.value
        locker.updated_at = now

        db.add(AssignmentLog(
            id=new_id(),
            package_id=pkg.id,
            locker_id=locker.id,
            assigned_by=assigned_by,
            assigned_at=now,
            created_at=now,
        ))
        db.flush()
        logger.info(f"[Assign] {pkg.tracking_number} → locker {locker.locker_number} by {assigned_by}")
        return PackageOut.model_validate(pkg)


@engine_operation
async def mark_delivered(store: LockerStore, package_id: str) -> PackageOut:
    """
    Courier confirms the package is in its locker. The locker stays occupied.
    A queued package may skip straight to delivered unless STRICT_DELIVERY_GATE is set.
    """
    with store.transaction() as db:
        pkg = load_or_raise(db, Package, package_id, "Package")

        if pkg.status in (PackageStatus.DELIVERED.value, PackageStatus.PICKED_UP.value):
            raise InvalidStateError(f"Package already {pkg.status}")
        if settings.STRICT_DELIVERY_GATE and pkg.status != PackageStatus.ASSIGNED.value:
            raise InvalidStateError("Package must be assigned to a locker before delivery")
        if pkg.status == PackageStatus.QUEUED.value:
            logger.warning(f"[Deliver] {pkg.tracking_number} marked delivered without a locker assignment")

        now = utcnow()
        pkg.status = PackageStatus.DELIVERED.value
        pkg.delivered_at = now
        pkg.updated_at = now
        db.flush()
        logger.info(f"[Deliver] {pkg.tracking_number} delivered to locker {pkg.locker_id}")
        return PackageOut.model_validate(pkg)


def _check_pickup_ready(pkg: Package):
    if pkg.status != PackageStatus.DELIVERED.value:
        raise InvalidStateError("Package not ready for pickup")


@engine_operation
async def pickup(store: LockerStore, package_id: str, user_id: str,
                 verifier: Optional[IdentityVerifier] = None) -> PackageOut:
    """
    Recipient collects a delivered package. Frees the locker and writes one
    pickup log row carrying the identity verifier's answer.
    """
    verifier = verifier or stub_verifier

    with store.transaction() as db:
        pkg = load_or_raise(db, Package, package_id, "Package")
        _check_pickup_ready(pkg)
        before = PackageOut.model_validate(pkg)

    verified = bool(await verifier(user_id, before))
    if not verified and settings.REQUIRE_IDENTITY_VERIFICATION:
        raise InvalidStateError("Identity verification failed")

    with store.transaction() as db:
        # Re-check: another call may have collected the package while we were verifying
        pkg = load_or_raise(db, Package, package_id, "Package")
        _check_pickup_ready(pkg)

        now = utcnow()
        pkg.status = PackageStatus.PICKED_UP.value
        pkg.picked_up_at = now
        pkg.updated_at = now

        if pkg.locker_id:
            locker = db.get(Locker, pkg.locker_id)
            if locker:
                locker.status = LockerStatus.AVAILABLE.value
                locker.updated_at = now
            else:
                logger.warning(f"[Pickup] {pkg.tracking_number} references missing locker {pkg.locker_id}")

        db.add(PickupLog(
            id=new_id(),
            package_id=pkg.id,
            user_id=user_id,
            locker_id=pkg.locker_id,
            picked_up_at=now,
            facial_recognition_verified=verified,
            created_at=now,
        ))
        db.flush()
        logger.info(f"[Pickup] {pkg.tracking_number} collected by {user_id} (verified={verified})")
        return PackageOut.model_validate(pkg)
