# =======================================================================================
# campus_access/services/student_service.py - Student Management Service
# =======================================================================================
from typing import Any, Dict, List, Optional
from sqlalchemy import DateTime, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError
from ..models.schemas import StudentCreate, StudentOut
from ..utils.exceptions import DuplicateCardUIDError, StudentNotFoundError
from ..utils.logger import get_logger
from ..utils.validators import validate_card_status, validate_card_uid
from .student_directory import StudentDirectory, student_directory

logger = get_logger("students")

STUDENT_COLUMNS = """
    id, name, email, card_uid, has_paid, card_status, institution_id, photo_url,
    class_name, category, class_level, program, age, created_at
"""


def _select(where: str = "", order: str = "ORDER BY id DESC"):
    return text(f"SELECT {STUDENT_COLUMNS} FROM students {where} {order}").columns(created_at=DateTime)


class StudentService:
    """Handles the student directory admin operations."""

    def __init__(self, directory: Optional[StudentDirectory] = None):
        self.directory = directory or student_directory

    # ----------------- helper -----------------
    @staticmethod
    def to_api(row: Dict[str, Any]) -> StudentOut:
        """Map a DB row to the camelCase shape the dashboard expects."""
        return StudentOut(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            cardUID=row["card_uid"],
            hasPaid=bool(row["has_paid"]),
            cardStatus=row["card_status"],
            institutionId=row["institution_id"],
            photoURL=row["photo_url"],
            class_name=row["class_name"],
            category=row["category"],
            classLevel=row["class_level"],
            program=row["program"],
            age=row["age"],
            created_at=row["created_at"],
        )

    def _fetch_row(self, conn: Connection, student_id: int) -> Dict[str, Any]:
        row = conn.execute(_select("WHERE id = :id", ""), {"id": student_id}).mappings().first()
        if not row:
            raise StudentNotFoundError("Student not found")
        return dict(row)

    # ----------------- queries -----------------
    def list_students(self, conn: Connection) -> List[StudentOut]:
        rows = conn.execute(_select()).mappings().all()
        return [self.to_api(row) for row in rows]

    def get_student(self, conn: Connection, student_id: int) -> StudentOut:
        return self.to_api(self._fetch_row(conn, student_id))

    def list_by_class(self, conn: Connection, category: str, class_level: str) -> List[StudentOut]:
        rows = conn.execute(
            _select("WHERE category = :category AND class_level = :level", "ORDER BY name"),
            {"category": category, "level": class_level},
        ).mappings().all()
        return [self.to_api(row) for row in rows]

    # ----------------- mutations -----------------
    def create_student(self, conn: Connection, request: StudentCreate) -> StudentOut:
        """Create a student; new cards start active and unpaid."""
        card_uid = validate_card_uid(request.cardUID).strip()

        existing = conn.execute(
            text("SELECT id FROM students WHERE card_uid = :uid"), {"uid": card_uid}
        ).first()
        if existing:
            raise DuplicateCardUIDError(f"Card {card_uid} is already assigned to another student")

        try:
            new_id = conn.execute(
                text("""
                    INSERT INTO students (
                        name, email, card_uid, has_paid, card_status, institution_id,
                        photo_url, class_name, category, class_level, program, age
                    )
                    VALUES (
                        :name, :email, :uid, :paid, 'active', :institution,
                        :photo, :class_name, :category, :level, :program, :age
                    )
                    RETURNING id
                """),
                {
                    "name": request.name.strip(),
                    "email": request.email.strip(),
                    "uid": card_uid,
                    "paid": False,
                    "institution": request.institutionId,
                    "photo": request.photoURL,
                    "class_name": request.class_name,
                    "category": request.category,
                    "level": request.classLevel,
                    "program": request.program,
                    "age": request.age,
                }
            ).scalar_one()
        except IntegrityError as e:
            # lost a race against a concurrent insert of the same card
            raise DuplicateCardUIDError(f"Card {card_uid} is already assigned to another student") from e

        logger.info("Created student %s with card %s", new_id, card_uid)
        return self.get_student(conn, new_id)

    def update_payment_status(self, conn: Connection, student_id: int, has_paid: bool) -> StudentOut:
        row = self._fetch_row(conn, student_id)
        conn.execute(
            text("UPDATE students SET has_paid = :paid WHERE id = :id"),
            {"paid": bool(has_paid), "id": student_id},
        )
        self.directory.invalidate_on_commit(conn, row["card_uid"])
        logger.info("Student %s payment status -> %s", student_id, has_paid)
        return self.get_student(conn, student_id)

    def update_card_status(self, conn: Connection, student_id: int, card_status: str) -> StudentOut:
        card_status = validate_card_status(card_status)
        row = self._fetch_row(conn, student_id)
        conn.execute(
            text("UPDATE students SET card_status = :status WHERE id = :id"),
            {"status": card_status, "id": student_id},
        )
        self.directory.invalidate_on_commit(conn, row["card_uid"])
        logger.info("Student %s card status -> %s", student_id, card_status)
        return self.get_student(conn, student_id)

    def delete_student(self, conn: Connection, student_id: int) -> None:
        row = self._fetch_row(conn, student_id)
        conn.execute(text("DELETE FROM attendance WHERE student_id = :id"), {"id": student_id})
        conn.execute(text("DELETE FROM students WHERE id = :id"), {"id": student_id})
        self.directory.invalidate_on_commit(conn, row["card_uid"])
        logger.info("Deleted student %s (card %s)", student_id, row["card_uid"])
