# lockerhub/models/enums.py
"""Value sets for role, size and status columns. Stored as their string values."""

import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    COURIER = "courier"
    USER = "user"


class LockerSize(str, enum.Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class LockerStatus(str, enum.Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


class PackageStatus(str, enum.Enum):
    QUEUED = "queued"
    ASSIGNED = "assigned"
    DELIVERED = "delivered"
    PICKED_UP = "picked_up"


# Packages in these states keep their locker occupied
IN_FLIGHT_STATUSES = (PackageStatus.ASSIGNED.value, PackageStatus.DELIVERED.value)


class SessionType(str, enum.Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"
    ACCESS = "access"


class SessionStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"
