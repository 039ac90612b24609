# lockerhub/models/locker.py
"""
Lockers table — one row per physical compartment.
Size is fixed at creation; only status changes afterwards.
"""

from sqlalchemy import Column, String, DateTime
from lockerhub.database import Base


class Locker(Base):
    __tablename__ = "lockers"

    id = Column(String(36), primary_key=True)
    locker_number = Column(String(50), unique=True, nullable=False, index=True)
    size = Column(String(20), nullable=False, index=True)      # small | medium | large
    status = Column(String(20), nullable=False, index=True)    # available | occupied | maintenance
    location = Column(String(200), nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<Locker {self.locker_number} size={self.size} status={self.status}>"
