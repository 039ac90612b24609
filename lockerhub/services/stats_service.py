# lockerhub/services/stats_service.py
"""
Fleet monitoring for the admin dashboard and report exports.

get_dashboard_stats reads every table in one transaction so an export sees
one consistent snapshot. check_consistency reports packages and lockers
whose states disagree; admin overrides and the permissive delivery rule
can produce such states.
"""

from collections import Counter

from sqlalchemy import func

from lockerhub.database import LockerStore
from lockerhub.models.enums import (
    IN_FLIGHT_STATUSES, LockerStatus, PackageStatus, SessionStatus, SessionType, UserRole,
)
from lockerhub.models.locker import Locker
from lockerhub.models.package import Package
from lockerhub.models.session import LockerSession
from lockerhub.models.user import User
from lockerhub.schemas.stats import ConsistencyIssue, DashboardStatsOut
from lockerhub.services.base import engine_operation
from lockerhub.utils.logger import get_logger

logger = get_logger(__name__)


def _count_by(db, column, values) -> dict:
    counts = dict(db.query(column, func.count()).group_by(column).all())
    return {v.value: counts.get(v.value, 0) for v in values}


@engine_operation
async def get_dashboard_stats(store: LockerStore) -> DashboardStatsOut:
    with store.transaction() as db:
        packages = _count_by(db, Package.status, PackageStatus)
        lockers = _count_by(db, Locker.status, LockerStatus)
        users = _count_by(db, User.role, UserRole)
        sessions = _count_by(db, LockerSession.session_type, SessionType)
        active = (
            db.query(func.count(LockerSession.id))
            .filter(LockerSession.status == SessionStatus.ACTIVE.value)
            .scalar()
        )
        return DashboardStatsOut(
            total_users=db.query(func.count(User.id)).scalar(),
            total_packages=db.query(func.count(Package.id)).scalar(),
            total_lockers=db.query(func.count(Locker.id)).scalar(),
            active_sessions=active,
            available_lockers=lockers[LockerStatus.AVAILABLE.value],
            delivered_packages=packages[PackageStatus.DELIVERED.value],
            packages_by_status=packages,
            lockers_by_status=lockers,
            users_by_role=users,
            sessions_by_type=sessions,
        )


@engine_operation
async def check_consistency(store: LockerStore) -> list[ConsistencyIssue]:
    issues = []
    with store.transaction() as db:
        lockers = {l.id: l for l in db.query(Locker).all()}
        packages = db.query(Package).all()

    holders = {}
    for pkg in packages:
        if pkg.status == PackageStatus.QUEUED.value and pkg.locker_id:
            issues.append(ConsistencyIssue(
                kind="queued_with_locker", package_id=pkg.id, locker_id=pkg.locker_id,
                detail=f"Queued package {pkg.tracking_number} references a locker",
            ))
        if pkg.status != PackageStatus.QUEUED.value and not pkg.locker_id:
            issues.append(ConsistencyIssue(
                kind="missing_locker", package_id=pkg.id,
                detail=f"Package {pkg.tracking_number} is {pkg.status} without a locker",
            ))
        if pkg.status in IN_FLIGHT_STATUSES and pkg.locker_id:
            holders.setdefault(pkg.locker_id, []).append(pkg)

    for locker_id, held in holders.items():
        if len(held) > 1:
            issues.append(ConsistencyIssue(
                kind="shared_locker", locker_id=locker_id,
                detail=f"{len(held)} in-flight packages share the locker: "
                       + ", ".join(p.tracking_number for p in held),
            ))

    for locker in lockers.values():
        held = locker.id in holders
        if locker.status == LockerStatus.OCCUPIED.value and not held:
            issues.append(ConsistencyIssue(
                kind="occupied_without_package", locker_id=locker.id,
                detail=f"Locker {locker.locker_number} is occupied but holds no package",
            ))
        elif locker.status != LockerStatus.OCCUPIED.value and held:
            issues.append(ConsistencyIssue(
                kind="locker_status_mismatch", locker_id=locker.id,
                detail=f"Locker {locker.locker_number} is {locker.status} but holds a package",
            ))

    if issues:
        kinds = Counter(i.kind for i in issues)
        logger.warning(f"[Consistency] {len(issues)} issue(s): {dict(kinds)}")
    return issues
