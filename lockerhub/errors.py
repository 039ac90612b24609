# lockerhub/errors.py
"""
Business-rule errors raised inside an engine transaction.
The service layer turns them into a failure envelope; they never reach
API callers as exceptions. Anything not derived from LockerHubError is an
unexpected fault and propagates.
"""

import enum


class ErrorCode(str, enum.Enum):
    NOT_FOUND = "NOT_FOUND"
    INVALID_STATE = "INVALID_STATE"
    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"


class LockerHubError(Exception):
    code = ErrorCode.INVALID_STATE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(LockerHubError):
    code = ErrorCode.NOT_FOUND


class InvalidStateError(LockerHubError):
    code = ErrorCode.INVALID_STATE


class ConflictError(LockerHubError):
    code = ErrorCode.CONFLICT


class ValidationFailed(LockerHubError):
    code = ErrorCode.VALIDATION_ERROR


class AuditLogImmutableError(RuntimeError):
    """An audit row was about to be changed or removed. Always a programming fault."""
