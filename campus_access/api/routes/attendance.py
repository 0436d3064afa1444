# =======================================================================================
# campus_access/api/routes/attendance.py - Attendance Endpoints
# =======================================================================================
from datetime import date
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.engine import Connection
from ...models.schemas import AttendanceRecordOut, AttendanceSaveRequest, AttendanceSaveResponse
from ...services.attendance_service import AttendanceService
from ..dependencies import get_db_connection, require_admin

router = APIRouter(dependencies=[Depends(require_admin)])
attendance_service = AttendanceService()

@router.get("/attendance", response_model=List[AttendanceRecordOut])
def get_attendance(
    day: date = Query(..., alias="date", description="Day to fetch, YYYY-MM-DD"),
    conn: Connection = Depends(get_db_connection),
):
    return attendance_service.get_attendance(conn, day)

@router.post("/attendance", response_model=AttendanceSaveResponse)
def save_attendance(request: AttendanceSaveRequest, conn: Connection = Depends(get_db_connection)):
    """Upsert on (studentId, date): re-submitting a day overwrites it."""
    saved = attendance_service.save_attendance(conn, request.records)
    return AttendanceSaveResponse(success=True, saved=saved)
