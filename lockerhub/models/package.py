# lockerhub/models/package.py
"""
Packages table.
Status only moves forward: queued → assigned → delivered → picked_up.
locker_id is set on assignment and kept after pickup as provenance.
"""

from sqlalchemy import Column, String, DateTime, Text
from lockerhub.database import Base


class Package(Base):
    __tablename__ = "packages"

    id = Column(String(36), primary_key=True)
    tracking_number = Column(String(50), unique=True, nullable=False, index=True)
    sender_id = Column(String(36), index=True)
    recipient_id = Column(String(36), nullable=False, index=True)
    recipient_name = Column(String(200), nullable=False)
    recipient_email = Column(String(255), nullable=False)
    recipient_phone = Column(String(50))
    locker_id = Column(String(36), index=True)
    status = Column(String(20), nullable=False, index=True)
    size = Column(String(20), nullable=False)
    description = Column(Text)
    assigned_at = Column(DateTime)
    delivered_at = Column(DateTime)
    picked_up_at = Column(DateTime)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<Package {self.tracking_number} status={self.status} locker={self.locker_id}>"
