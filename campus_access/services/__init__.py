# =======================================================================================
# campus_access/services/__init__.py - Services Package
# =======================================================================================
from .access_control import AccessControlService, ACCESS_RULES, decide
from .access_log import AccessLogService
from .attendance_service import AttendanceService
from .auth_service import AuthService
from .dashboard_service import DashboardService
from .event_stream import AccessEventBroadcaster, event_broadcaster
from .student_directory import StudentDirectory, student_directory
from .student_service import StudentService

__all__ = [
    "AccessControlService", "ACCESS_RULES", "decide", "AccessLogService", "AttendanceService",
    "AuthService", "DashboardService", "AccessEventBroadcaster", "event_broadcaster",
    "StudentDirectory", "student_directory", "StudentService",
]
