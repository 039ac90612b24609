"""Fleet monitoring: dashboard counters and the state consistency report."""

from fastapi import APIRouter, Depends, Response

from lockerhub.database import LockerStore, get_store
from lockerhub.schemas.common import ApiResponse
from lockerhub.schemas.stats import ConsistencyIssue, DashboardStatsOut
from lockerhub.services import stats_service
from lockerhub.utils.responses import respond

router = APIRouter()


@router.get("/stats/dashboard", response_model=ApiResponse[DashboardStatsOut])
async def dashboard_stats(response: Response, store: LockerStore = Depends(get_store)):
    return respond(await stats_service.get_dashboard_stats(store), response)


@router.get("/stats/consistency", response_model=ApiResponse[list[ConsistencyIssue]],
            summary="Lockers and packages whose states disagree")
async def consistency_report(response: Response, store: LockerStore = Depends(get_store)):
    return respond(await stats_service.check_consistency(store), response)
