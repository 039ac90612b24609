# lockerhub/services/session_service.py
"""
Locker sessions: one pickup / delivery / access episode per row.
Only create and complete exist; a session never leaves "completed".
"""

from typing import Optional

from lockerhub.database import LockerStore
from lockerhub.errors import InvalidStateError
from lockerhub.models.enums import SessionStatus, SessionType
from lockerhub.models.locker import Locker
from lockerhub.models.package import Package
from lockerhub.models.session import LockerSession
from lockerhub.models.user import User
from lockerhub.schemas.session import SessionOut
from lockerhub.services.base import coerce_enum, engine_operation, load_or_raise, snapshot
from lockerhub.utils.clock import utcnow
from lockerhub.utils.ids import new_id
from lockerhub.utils.logger import get_logger

logger = get_logger(__name__)


def _list_sessions(store: LockerStore, user_id: Optional[str] = None, active_only: bool = False):
    with store.transaction() as db:
        q = db.query(LockerSession)
        if user_id:
            q = q.filter(LockerSession.user_id == user_id)
        if active_only:
            q = q.filter(LockerSession.status == SessionStatus.ACTIVE.value)
        return snapshot(SessionOut, q.order_by(LockerSession.started_at.desc()).all())


@engine_operation
async def get_all_sessions(store: LockerStore) -> list[SessionOut]:
    return _list_sessions(store)


@engine_operation
async def get_active_sessions(store: LockerStore) -> list[SessionOut]:
    return _list_sessions(store, active_only=True)


@engine_operation
async def get_my_sessions(store: LockerStore, user_id: str) -> list[SessionOut]:
    """Sessions of the acting user (id supplied by the identity layer)."""
    return _list_sessions(store, user_id=user_id)


@engine_operation
async def get_my_active_sessions(store: LockerStore, user_id: str) -> list[SessionOut]:
    return _list_sessions(store, user_id=user_id, active_only=True)


@engine_operation
async def get_sessions_by_user(store: LockerStore, user_id: str) -> list[SessionOut]:
    """Admin view of any user's sessions."""
    return _list_sessions(store, user_id=user_id)


@engine_operation
async def create_session(store: LockerStore, user_id: str, locker_id: str,
                         session_type: SessionType, package_id: Optional[str] = None) -> SessionOut:
    session_type = coerce_enum(SessionType, session_type, "session type")
    with store.transaction() as db:
        load_or_raise(db, User, user_id, "User")
        load_or_raise(db, Locker, locker_id, "Locker")
        if package_id:
            load_or_raise(db, Package, package_id, "Package")

        now = utcnow()
        session = LockerSession(
            id=new_id(),
            user_id=user_id,
            locker_id=locker_id,
            package_id=package_id,
            session_type=session_type.value,
            status=SessionStatus.ACTIVE.value,
            facial_recognition_verified=False,
            started_at=now,
            created_at=now,
        )
        db.add(session)
        db.flush()
        logger.info(f"[Session] {session_type.value} session {session.id} started by {user_id} at locker {locker_id}")
        return SessionOut.model_validate(session)


@engine_operation
async def complete_session(store: LockerStore, session_id: str) -> SessionOut:
    with store.transaction() as db:
        session = load_or_raise(db, LockerSession, session_id, "Session")
        if session.status != SessionStatus.ACTIVE.value:
            raise InvalidStateError(f"Session is not active (status: {session.status})")

        session.status = SessionStatus.COMPLETED.value
        session.completed_at = utcnow()
        db.flush()
        logger.info(f"[Session] {session.id} completed")
        return SessionOut.model_validate(session)
