from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from lockerhub.models.enums import SessionStatus, SessionType


class SessionCreate(BaseModel):
    user_id: str
    locker_id: str
    session_type: SessionType
    package_id: Optional[str] = None


class SessionOut(BaseModel):
    id: str
    user_id: str
    locker_id: str
    package_id: Optional[str]
    session_type: SessionType
    status: SessionStatus
    facial_recognition_verified: bool
    started_at: datetime
    completed_at: Optional[datetime]
    notes: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
