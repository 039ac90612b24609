# lockerhub/schemas/common.py
"""Uniform response envelope returned by every engine operation."""

from pydantic import BaseModel
from typing import Generic, Optional, TypeVar

from lockerhub.errors import ErrorCode, LockerHubError

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None         # human-readable
    error_code: Optional[ErrorCode] = None

    @classmethod
    def ok(cls, data=None):
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, exc: LockerHubError):
        return cls(success=False, error=exc.message, error_code=exc.code)
