from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from lockerhub.models.enums import UserRole


class UserRegister(BaseModel):
    email: str
    full_name: str
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    email: str


class RoleUpdate(BaseModel):
    role: UserRole


class UserOut(BaseModel):
    id: str
    email: str
    full_name: str
    phone: Optional[str]
    role: UserRole
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
