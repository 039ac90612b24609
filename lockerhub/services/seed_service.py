# lockerhub/services/seed_service.py
"""
Demo fleet for local runs: one admin, one courier, two recipients,
six lockers and a few packages at different lifecycle stages.
Goes through the normal engine operations so audit logs are written too.
"""

from lockerhub.database import LockerStore
from lockerhub.models.enums import LockerSize, UserRole
from lockerhub.schemas.locker import LockerCreate
from lockerhub.schemas.package import PackageCreate
from lockerhub.schemas.user import UserRegister
from lockerhub.services import locker_service, package_service, user_service
from lockerhub.utils.logger import get_logger

logger = get_logger(__name__)

DEMO_USERS = [
    ("admin@lockerhub.local", "Admin User", UserRole.ADMIN),
    ("courier@lockerhub.local", "Courier One", UserRole.COURIER),
    ("alice@example.com", "Alice Recipient", UserRole.USER),
    ("bob@example.com", "Bob Recipient", UserRole.USER),
]

DEMO_LOCKERS = [
    ("A-01", LockerSize.SMALL, "Lobby Bank A"),
    ("A-02", LockerSize.SMALL, "Lobby Bank A"),
    ("A-03", LockerSize.MEDIUM, "Lobby Bank A"),
    ("B-01", LockerSize.MEDIUM, "Garage Bank B"),
    ("B-02", LockerSize.LARGE, "Garage Bank B"),
    ("B-03", LockerSize.LARGE, "Garage Bank B"),
]


async def _unwrap(call):
    result = await call
    if not result.success:
        raise RuntimeError(f"Demo seed step failed: {result.error}")
    return result.data


async def seed_demo_data(store: LockerStore) -> dict:
    """Populate an empty store. Returns counts of what was created."""
    users = {}
    for email, name, role in DEMO_USERS:
        users[email] = await _unwrap(user_service.register_user(store, UserRegister(email=email, full_name=name), role))

    lockers = []
    for number, size, location in DEMO_LOCKERS:
        lockers.append(await _unwrap(locker_service.create_locker(
            store, LockerCreate(locker_number=number, size=size, location=location),
        )))

    courier = users["courier@lockerhub.local"]
    alice = users["alice@example.com"]
    bob = users["bob@example.com"]

    def intake(recipient, size, description):
        return package_service.create_package(store, PackageCreate(
            recipient_id=recipient.id, recipient_name=recipient.full_name,
            recipient_email=recipient.email, size=size, description=description,
        ))

    waiting = await _unwrap(intake(alice, LockerSize.SMALL, "Books"))
    in_locker = await _unwrap(intake(alice, LockerSize.MEDIUM, "Shoes"))
    assigned = await _unwrap(intake(bob, LockerSize.LARGE, "Monitor"))

    await _unwrap(package_service.assign_locker(store, in_locker.id, lockers[2].id, courier.id))
    await _unwrap(package_service.mark_delivered(store, in_locker.id))
    await _unwrap(package_service.assign_locker(store, assigned.id, lockers[4].id, courier.id))

    logger.info(f"[Seed] demo data loaded: {len(users)} users, {len(lockers)} lockers, 3 packages "
                f"(queued {waiting.tracking_number})")
    return {"users": len(users), "lockers": len(lockers), "packages": 3}
