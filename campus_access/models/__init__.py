# =======================================================================================
# campus_access/models/__init__.py - Models Package
# =======================================================================================
from .schemas import *
from .enums import *
from .tables import metadata, students, access_logs, attendance, admins

__all__ = [
    "RFIDLogRequest", "RFIDLogResponse", "AccessLogEntry", "StudentRecord", "StudentOut",
    "StudentCreate", "PaymentStatusUpdate", "CardStatusUpdate", "AttendanceRecordIn",
    "AttendanceSaveRequest", "AttendanceRecordOut", "AttendanceSaveResponse",
    "CardStatus", "AccessType", "AttendanceStatus", "AccessReason",
    "metadata", "students", "access_logs", "attendance", "admins",
]
