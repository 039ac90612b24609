from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class AssignmentLogOut(BaseModel):
    id: str
    package_id: str
    locker_id: str
    assigned_by: str
    assigned_at: datetime
    notes: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class PickupLogOut(BaseModel):
    id: str
    package_id: str
    user_id: str
    locker_id: Optional[str]
    picked_up_at: datetime
    facial_recognition_verified: bool
    notes: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
