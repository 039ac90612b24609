from pydantic import BaseModel
from typing import Optional


class DashboardStatsOut(BaseModel):
    total_users: int
    total_packages: int
    total_lockers: int
    active_sessions: int
    available_lockers: int
    delivered_packages: int
    packages_by_status: dict[str, int]
    lockers_by_status: dict[str, int]
    users_by_role: dict[str, int]
    sessions_by_type: dict[str, int]


class ConsistencyIssue(BaseModel):
    kind: str   # queued_with_locker | missing_locker | shared_locker | occupied_without_package | locker_status_mismatch
    locker_id: Optional[str] = None
    package_id: Optional[str] = None
    detail: str
