# =======================================================================================
# campus_access/services/dashboard_service.py
# =======================================================================================
from datetime import datetime, timedelta
from typing import Dict, Optional
from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.engine import Connection
from .access_log import AccessLogService, utcnow


class DashboardService:
    """Aggregated counters and the access log listing for the dashboard."""

    def __init__(self, access_log: Optional[AccessLogService] = None):
        self.access_log = access_log or AccessLogService()

    # ---------- summary ----------

    def get_summary(self, conn: Connection, now: Optional[datetime] = None) -> Dict[str, int]:
        students = conn.execute(
            text(
                """
                SELECT
                  COUNT(*) AS total_students,
                  SUM(CASE WHEN has_paid THEN 1 ELSE 0 END)               AS paid_students,
                  SUM(CASE WHEN card_status = 'active' THEN 1 ELSE 0 END)  AS active_cards,
                  SUM(CASE WHEN card_status = 'blocked' THEN 1 ELSE 0 END) AS blocked_cards
                FROM students
                """
            )
        ).mappings().first()

        day_start = (now or utcnow()).replace(hour=0, minute=0, second=0, microsecond=0)
        taps = conn.execute(
            text(
                """
                SELECT
                  COUNT(*) AS today_access,
                  SUM(CASE WHEN access = 'denied' THEN 1 ELSE 0 END) AS denied_access
                FROM access_logs
                WHERE timestamp >= :start AND timestamp < :end
                """
            ).bindparams(
                bindparam("start", type_=DateTime),
                bindparam("end", type_=DateTime),
            ),
            {"start": day_start, "end": day_start + timedelta(days=1)},
        ).mappings().first()

        total = int(students["total_students"] or 0)
        paid = int(students["paid_students"] or 0)
        return {
            "totalStudents": total,
            "paidStudents": paid,
            "unpaidStudents": total - paid,
            "activeCards": int(students["active_cards"] or 0),
            "blockedCards": int(students["blocked_cards"] or 0),
            "todayAccess": int(taps["today_access"] or 0),
            "deniedAccess": int(taps["denied_access"] or 0),
        }

    # ---------- logs ----------

    def get_logs(self, conn: Connection, limit: int = 50, offset: int = 0,
                 access: Optional[str] = None, search: Optional[str] = None):
        return self.access_log.list_logs(conn, limit=limit, offset=offset, access=access, search=search)
