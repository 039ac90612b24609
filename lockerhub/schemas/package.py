from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from lockerhub.models.enums import LockerSize, PackageStatus


class PackageCreate(BaseModel):
    recipient_id: str
    recipient_name: str
    recipient_email: str
    size: LockerSize
    recipient_phone: Optional[str] = None
    sender_id: Optional[str] = None
    description: Optional[str] = None


class AssignRequest(BaseModel):
    locker_id: str
    assigned_by: str


class PickupRequest(BaseModel):
    user_id: str


class PackageOut(BaseModel):
    id: str
    tracking_number: str
    sender_id: Optional[str]
    recipient_id: str
    recipient_name: str
    recipient_email: str
    recipient_phone: Optional[str]
    locker_id: Optional[str]
    status: PackageStatus
    size: LockerSize
    description: Optional[str]
    assigned_at: Optional[datetime]
    delivered_at: Optional[datetime]
    picked_up_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
