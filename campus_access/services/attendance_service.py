# =======================================================================================
# campus_access/services/attendance_service.py - Attendance Recording
# =======================================================================================
from datetime import date
from typing import List
from sqlalchemy import Date, DateTime, bindparam, text
from sqlalchemy.engine import Connection
from ..models.schemas import AttendanceRecordIn, AttendanceRecordOut
from ..utils.exceptions import StudentNotFoundError
from ..utils.logger import get_logger
from ..utils.validators import validate_attendance_status

logger = get_logger("attendance")

# (student_id, date) is unique; a re-submission overwrites the status
UPSERT_ATTENDANCE = text("""
    INSERT INTO attendance (student_id, date, status)
    VALUES (:student_id, :date, :status)
    ON CONFLICT (student_id, date) DO UPDATE SET status = excluded.status
""").bindparams(bindparam("date", type_=Date))


class AttendanceService:
    """Per-day present/absent records."""

    def save_attendance(self, conn: Connection, records: List[AttendanceRecordIn]) -> int:
        """Upsert records; returns how many were written."""
        if not records:
            return 0

        # last submission wins when the same pair appears twice in one batch
        merged = {}
        for record in records:
            validate_attendance_status(record.status)
            merged[(record.studentId, record.date)] = record.status

        student_ids = sorted({student_id for student_id, _ in merged})
        known = {
            row[0]
            for row in conn.execute(
                text("SELECT id FROM students WHERE id IN :ids").bindparams(
                    bindparam("ids", expanding=True)
                ),
                {"ids": student_ids},
            )
        }
        missing = [student_id for student_id in student_ids if student_id not in known]
        if missing:
            raise StudentNotFoundError(f"Unknown student id(s): {', '.join(map(str, missing))}")

        conn.execute(
            UPSERT_ATTENDANCE,
            [
                {"student_id": student_id, "date": day, "status": status}
                for (student_id, day), status in merged.items()
            ],
        )
        logger.info("Saved %d attendance record(s)", len(merged))
        return len(merged)

    def get_attendance(self, conn: Connection, day: date) -> List[AttendanceRecordOut]:
        rows = conn.execute(
            text("""
                SELECT id, student_id, date, status, created_at
                FROM attendance
                WHERE date = :date
                ORDER BY student_id
            """).bindparams(bindparam("date", type_=Date)).columns(date=Date, created_at=DateTime),
            {"date": day},
        ).mappings().all()

        return [
            AttendanceRecordOut(
                id=row["id"],
                studentId=row["student_id"],
                date=row["date"],
                status=row["status"],
                createdAt=row["created_at"],
            )
            for row in rows
        ]
