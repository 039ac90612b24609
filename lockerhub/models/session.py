# lockerhub/models/session.py
"""
Locker sessions table — one bounded interaction (pickup, delivery, access)
between a user and a locker. Named LockerSession to stay clear of the ORM Session.
"""

from sqlalchemy import Column, String, DateTime, Text, Boolean
from lockerhub.database import Base


class LockerSession(Base):
    __tablename__ = "sessions"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), nullable=False, index=True)
    locker_id = Column(String(36), nullable=False)
    package_id = Column(String(36))
    session_type = Column(String(20), nullable=False)   # pickup | delivery | access
    status = Column(String(20), nullable=False, index=True)
    facial_recognition_verified = Column(Boolean, default=False, nullable=False)
    started_at = Column(DateTime, nullable=False)
    completed_at = Column(DateTime)
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<LockerSession {self.id} type={self.session_type} status={self.status}>"
