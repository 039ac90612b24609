from pydantic import BaseModel
from datetime import datetime

from lockerhub.models.enums import LockerSize, LockerStatus


class LockerCreate(BaseModel):
    locker_number: str
    size: LockerSize
    location: str


class LockerStatusUpdate(BaseModel):
    status: LockerStatus


class LockerOut(BaseModel):
    id: str
    locker_number: str
    size: LockerSize
    status: LockerStatus
    location: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
