# lockerhub/models/user.py
"""
Users table — admins, couriers and recipients share one table.
Role is a capability selector, not a rank.
"""

from sqlalchemy import Column, String, DateTime
from lockerhub.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(200), nullable=False)
    phone = Column(String(50))
    role = Column(String(20), nullable=False, index=True)   # admin | courier | user
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<User {self.email} role={self.role}>"
