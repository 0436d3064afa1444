# =======================================================================================
# campus_access/services/student_directory.py - Card UID Lookup
# =======================================================================================
import threading
import time
from collections import OrderedDict
from typing import Optional, Tuple
from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from ..config import config
from ..database import after_commit
from ..models.schemas import StudentRecord
from ..utils.exceptions import DirectoryUnavailableError
from ..utils.logger import get_logger

logger = get_logger("directory")


class StudentDirectory:
    """
    Lookup of students by card UID for access decisions.

    Hits are kept in a small TTL/LRU cache; admin changes to a student
    must call invalidate_on_commit() with the affected card UID.
    """

    def __init__(self, ttl: Optional[float] = None, max_size: Optional[int] = None):
        # key = card_uid, value = (timestamp, StudentRecord)
        self._cache: "OrderedDict[str, Tuple[float, StudentRecord]]" = OrderedDict()
        self._cache_ttl = config.CARD_CACHE_TTL if ttl is None else ttl
        self._cache_max = config.CARD_CACHE_MAX if max_size is None else max_size
        self._lock = threading.Lock()

    # ----------------------------------------------------------------------
    # Cache helpers
    # ----------------------------------------------------------------------
    def _get_cached(self, card_uid: str) -> Optional[StudentRecord]:
        if self._cache_ttl <= 0:
            return None
        with self._lock:
            item = self._cache.get(card_uid)
            if not item:
                return None

            ts, student = item
            if time.monotonic() - ts > self._cache_ttl:
                self._cache.pop(card_uid, None)
                return None

            self._cache.move_to_end(card_uid)
            return student

    def _store(self, student: StudentRecord) -> None:
        if self._cache_ttl <= 0:
            return
        with self._lock:
            self._cache[student.card_uid] = (time.monotonic(), student)
            while len(self._cache) > self._cache_max:
                self._cache.popitem(last=False)

    def invalidate(self, card_uid: Optional[str]) -> None:
        """Drop the cached lookup for a card UID."""
        if not card_uid:
            return
        with self._lock:
            self._cache.pop(card_uid, None)

    def invalidate_on_commit(self, conn: Connection, card_uid: Optional[str]) -> None:
        """
        Drop the cached lookup now and again once conn commits, so a tap that
        read the old row in between cannot leave it cached.
        """
        self.invalidate(card_uid)
        after_commit(conn, lambda: self.invalidate(card_uid))

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    # ----------------------------------------------------------------------
    # Lookup
    # ----------------------------------------------------------------------
    def find_by_card_uid(self, conn: Connection, card_uid: str) -> Optional[StudentRecord]:
        """Return the student holding this card, or None. No side effects."""
        cached = self._get_cached(card_uid)
        if cached is not None:
            logger.debug("Cache hit for card %s", card_uid)
            return cached

        try:
            row = conn.execute(
                text("""
                    SELECT id, name, email, card_uid, has_paid, card_status
                    FROM students
                    WHERE card_uid = :uid
                """),
                {"uid": card_uid}
            ).mappings().first()
        except SQLAlchemyError as e:
            logger.error("Student lookup failed for card %s: %s", card_uid, e)
            raise DirectoryUnavailableError("Student directory unavailable") from e

        if not row:
            return None

        student = StudentRecord(**row)
        self._store(student)
        return student

# Shared by the access decision and the student admin routes
student_directory = StudentDirectory()
