"""
Tests for the per-request transaction and its after-commit callbacks.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import text

from campus_access.database import after_commit


class TestAfterCommit:
    def test_runs_once_the_transaction_commits(self, db):
        calls = []
        with db.get_connection() as conn:
            after_commit(conn, lambda: calls.append("done"))
            assert calls == []

        assert calls == ["done"]

    def test_dropped_on_rollback(self, seeded_db):
        calls = []
        with pytest.raises(RuntimeError):
            with seeded_db.get_connection() as conn:
                conn.execute(text("DELETE FROM students"))
                after_commit(conn, lambda: calls.append("done"))
                raise RuntimeError("boom")

        assert calls == []
        with seeded_db.get_connection() as conn:
            assert conn.execute(text("SELECT COUNT(*) FROM students")).scalar() == 4

    def test_unmanaged_connection_runs_immediately(self):
        calls = []
        after_commit(MagicMock(info={}), lambda: calls.append("done"))

        assert calls == ["done"]
