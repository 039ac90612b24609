# lockerhub/services/log_service.py
"""Read access to the assignment and pickup audit trails. Newest first."""

from typing import Optional

from lockerhub.database import LockerStore
from lockerhub.models.audit_log import AssignmentLog, PickupLog
from lockerhub.schemas.audit_log import AssignmentLogOut, PickupLogOut
from lockerhub.services.base import engine_operation, snapshot


def _pickup_rows(store: LockerStore, user_id: Optional[str]):
    with store.transaction() as db:
        q = db.query(PickupLog)
        if user_id:
            q = q.filter(PickupLog.user_id == user_id)
        return snapshot(PickupLogOut, q.order_by(PickupLog.picked_up_at.desc()).all())


@engine_operation
async def get_pickup_logs(store: LockerStore) -> list[PickupLogOut]:
    return _pickup_rows(store, None)


@engine_operation
async def get_pickup_logs_by_user(store: LockerStore, user_id: str) -> list[PickupLogOut]:
    return _pickup_rows(store, user_id)


@engine_operation
async def get_assignment_logs(store: LockerStore, user_id: Optional[str] = None) -> list[AssignmentLogOut]:
    """All assignment rows, or only those written by one courier."""
    with store.transaction() as db:
        q = db.query(AssignmentLog)
        if user_id:
            q = q.filter(AssignmentLog.assigned_by == user_id)
        return snapshot(AssignmentLogOut, q.order_by(AssignmentLog.assigned_at.desc()).all())
