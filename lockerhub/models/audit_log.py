# lockerhub/models/audit_log.py
"""
Assignment and pickup audit tables.
Append-only: rows are written once by the engine and any later
UPDATE or DELETE through the ORM is refused.
"""

from sqlalchemy import Column, String, DateTime, Text, Boolean, event
from lockerhub.database import Base
from lockerhub.errors import AuditLogImmutableError


class AssignmentLog(Base):
    __tablename__ = "assignment_logs"

    id = Column(String(36), primary_key=True)
    package_id = Column(String(36), nullable=False, index=True)
    locker_id = Column(String(36), nullable=False)
    assigned_by = Column(String(36), nullable=False, index=True)
    assigned_at = Column(DateTime, nullable=False, index=True)
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<AssignmentLog pkg={self.package_id} locker={self.locker_id} by={self.assigned_by}>"


class PickupLog(Base):
    __tablename__ = "pickup_logs"

    id = Column(String(36), primary_key=True)
    package_id = Column(String(36), nullable=False, index=True)
    user_id = Column(String(36), nullable=False, index=True)
    locker_id = Column(String(36))
    picked_up_at = Column(DateTime, nullable=False, index=True)
    facial_recognition_verified = Column(Boolean, nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<PickupLog pkg={self.package_id} user={self.user_id} verified={self.facial_recognition_verified}>"


def _refuse_mutation(mapper, connection, target):
    raise AuditLogImmutableError(f"{target.__tablename__} rows are append-only (id={target.id})")


for _log_model in (AssignmentLog, PickupLog):
    event.listen(_log_model, "before_update", _refuse_mutation)
    event.listen(_log_model, "before_delete", _refuse_mutation)
