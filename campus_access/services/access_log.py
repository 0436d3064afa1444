# =======================================================================================
# campus_access/services/access_log.py - Append-only Access Log
# =======================================================================================
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import func, insert, or_, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from ..models.schemas import AccessLogEntry
from ..models.tables import access_logs
from ..utils.exceptions import AccessLogWriteError
from ..utils.logger import get_logger

logger = get_logger("access_log")


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in access_logs.timestamp."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class AccessLogService:
    """Writes and reads access log entries. Entries are never updated or deleted."""

    @staticmethod
    def _to_entry(row) -> AccessLogEntry:
        return AccessLogEntry(
            id=row["id"],
            cardUID=row["card_uid"],
            studentName=row["student_name"],
            timestamp=row["timestamp"],
            access=row["access"],
            reason=row["reason"],
        )

    def append(self, conn: Connection, *entries: Dict[str, Any]) -> List[AccessLogEntry]:
        """
        Append one or more entries, each a dict with card_uid, access, reason
        and optional student_name. The timestamp is assigned here.
        Raises AccessLogWriteError instead of dropping anything.
        """
        if not entries:
            return []

        written: List[AccessLogEntry] = []
        try:
            for entry in entries:
                values = {
                    "card_uid": entry["card_uid"],
                    "student_name": entry.get("student_name"),
                    "timestamp": utcnow(),
                    "access": entry["access"],
                    "reason": entry["reason"],
                }
                row = conn.execute(
                    insert(access_logs).values(**values).returning(access_logs.c.id)
                ).mappings().first()
                written.append(self._to_entry({**values, "id": row["id"]}))
        except SQLAlchemyError as e:
            logger.error("Failed to append access log entry: %s", e)
            raise AccessLogWriteError("Access log unavailable") from e

        return written

    def list_logs(
        self,
        conn: Connection,
        limit: int = 50,
        offset: int = 0,
        access: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[AccessLogEntry], int]:
        """Newest first, optionally filtered by outcome and name / card search."""
        conditions = []
        if access:
            conditions.append(access_logs.c.access == access)
        if search:
            like = f"%{search}%"
            conditions.append(
                or_(access_logs.c.student_name.ilike(like), access_logs.c.card_uid.ilike(like))
            )

        total = conn.execute(
            select(func.count()).select_from(access_logs).where(*conditions)
        ).scalar_one()

        rows = conn.execute(
            select(access_logs)
            .where(*conditions)
            .order_by(access_logs.c.timestamp.desc(), access_logs.c.id.desc())
            .limit(limit)
            .offset(offset)
        ).mappings().all()

        return [self._to_entry(row) for row in rows], int(total)
