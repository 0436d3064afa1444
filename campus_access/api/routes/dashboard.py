# =======================================================================================
# campus_access/api/routes/dashboard.py
# =======================================================================================
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.engine import Connection

from ...models.enums import AccessType
from ...models.schemas import AnalyticsResponse, Summary, LogsResponse
from ...services.dashboard_service import DashboardService
from ..dependencies import get_db_connection, require_admin

router = APIRouter(dependencies=[Depends(require_admin)])
dashboard_service = DashboardService()


@router.get("/analytics", response_model=AnalyticsResponse)
def get_analytics(conn: Connection = Depends(get_db_connection)):
    summary_dict = dashboard_service.get_summary(conn)
    return AnalyticsResponse(summary=Summary(**summary_dict))


@router.get("/logs", response_model=LogsResponse, response_model_exclude_none=True)
def get_logs(
    limit: int = Query(50, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    access: Optional[AccessType] = Query(None),
    search: Optional[str] = Query(None, description="Student name or card UID"),
    conn: Connection = Depends(get_db_connection),
):
    logs, total = dashboard_service.get_logs(conn, limit=limit, offset=offset, access=access, search=search)
    return LogsResponse(logs=logs, total=total, limit=limit, offset=offset)
