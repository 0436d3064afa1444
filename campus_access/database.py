# =======================================================================================
# campus_access/database.py - Database Management
# =======================================================================================
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import QueuePool, StaticPool
from .config import config
from .models.tables import metadata
from .utils.logger import get_logger

logger = get_logger("database")

AFTER_COMMIT_KEY = "campus_access.after_commit"


def after_commit(conn: Connection, callback: Callable[[], None]) -> None:
    """
    Run callback once the transaction on conn has committed. Dropped on
    rollback. Connections not opened through DatabaseManager.get_connection
    run it immediately.
    """
    callbacks = conn.info.get(AFTER_COMMIT_KEY)
    if isinstance(callbacks, list):
        callbacks.append(callback)
    else:
        callback()


class DatabaseManager:
    """Manages database connections and transactions."""

    def __init__(self, url: Optional[str] = None):
        self.url = url or config.DB_URL
        self.engine: Engine = self._build_engine(self.url)

    @staticmethod
    def _build_engine(url: str) -> Engine:
        if url.startswith("sqlite"):
            # One shared connection so an in-memory database survives across requests
            return create_engine(
                url,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
                future=True,
            )
        return create_engine(
            url,
            poolclass=QueuePool,
            pool_size=config.DB_POOL_SIZE,
            max_overflow=config.DB_MAX_OVERFLOW,
            pool_pre_ping=True,
            isolation_level="READ COMMITTED",
            future=True,
        )

    def create_schema(self) -> None:
        """Create any missing tables."""
        metadata.create_all(self.engine)
        logger.info("Database schema ready")

    @contextmanager
    def get_connection(self) -> Iterator[Connection]:
        """Get a database connection inside a transaction, committed on exit."""
        callbacks: List[Callable[[], None]] = []
        with self.engine.begin() as conn:
            conn.info[AFTER_COMMIT_KEY] = callbacks
            try:
                yield conn
            finally:
                conn.info.pop(AFTER_COMMIT_KEY, None)
        for callback in callbacks:
            callback()

    def fetch_one(self, query: str, params: dict = None):
        """Fetch a single result."""
        with self.get_connection() as conn:
            result = conn.execute(text(query), params or {})
            return result.mappings().first()

    def dispose(self) -> None:
        self.engine.dispose()

# Global database instance
db_manager = DatabaseManager()
