# =======================================================================================
# campus_access/services/access_control.py - Core Business Logic
# =======================================================================================
from dataclasses import dataclass
from typing import Callable, Optional, Tuple
from sqlalchemy.engine import Connection
from ..database import after_commit
from ..models.enums import AccessReason, AccessType
from ..models.schemas import RFIDLogResponse, StudentRecord
from ..utils.logger import get_logger
from ..utils.validators import validate_card_uid
from .access_log import AccessLogService
from .event_stream import AccessEventBroadcaster, event_broadcaster
from .student_directory import StudentDirectory, student_directory

logger = get_logger("access")


@dataclass(frozen=True)
class AccessRule:
    """One predicate/outcome pair of the decision table."""
    name: str
    applies: Callable[[Optional[StudentRecord]], bool]
    access: AccessType
    reason: AccessReason


# Evaluated top to bottom, first match wins. Blocked is checked before unpaid,
# so a blocked card with unpaid fees is reported as "Card blocked".
ACCESS_RULES: Tuple[AccessRule, ...] = (
    AccessRule("card-not-found", lambda s: s is None, "denied", AccessReason.CARD_NOT_FOUND),
    AccessRule("card-blocked", lambda s: s.card_status == "blocked", "denied", AccessReason.CARD_BLOCKED),
    AccessRule("unpaid-fees", lambda s: not s.has_paid, "denied", AccessReason.UNPAID_FEES),
    AccessRule("valid-access", lambda s: True, "allowed", AccessReason.VALID_ACCESS),
)


def decide(student: Optional[StudentRecord]) -> AccessRule:
    """Return the first rule matching the (possibly missing) student."""
    for rule in ACCESS_RULES:
        if rule.applies(student):
            return rule
    raise RuntimeError("Access rules must end with a catch-all")


class AccessControlService:
    """Handles the card tap -> decision -> log pipeline."""

    def __init__(
        self,
        directory: Optional[StudentDirectory] = None,
        access_log: Optional[AccessLogService] = None,
        broadcaster: Optional[AccessEventBroadcaster] = None,
    ):
        self.directory = directory or student_directory
        self.access_log = access_log or AccessLogService()
        self.broadcaster = broadcaster or event_broadcaster

    def process_card_tap(self, conn: Connection, card_uid: str) -> RFIDLogResponse:
        """
        Decide access for a tapped card and append exactly one log entry.

        Unknown cards are a normal denial. Lookup and log failures propagate
        as CollaboratorError and are never turned into a denial.
        """
        card_uid = validate_card_uid(card_uid)

        student = self.directory.find_by_card_uid(conn, card_uid)
        rule = decide(student)
        student_name = student.name if student is not None else None

        (entry,) = self.access_log.append(
            conn,
            {
                "card_uid": card_uid,
                "student_name": student_name,
                "access": rule.access,
                "reason": rule.reason.value,
            },
        )
        logger.info("Card %s -> %s (%s)", card_uid, rule.access, rule.name)

        after_commit(conn, lambda: self.broadcaster.publish(entry))

        return RFIDLogResponse(
            success=True,
            access=rule.access,
            reason=rule.reason.value,
            studentName=student_name,
            logId=entry.id if rule.access == "allowed" else None,
        )
