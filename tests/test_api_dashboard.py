"""
API tests for the dashboard counters and the access log listing.
"""

from datetime import datetime, timedelta
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy import insert

from campus_access.database import db_manager
from campus_access.main import app
from campus_access.models.tables import access_logs
from campus_access.services.access_log import utcnow


def tap(client, card_uid):
    return client.post("/api/rfid-log", json={"cardUID": card_uid})


class TestAnalytics:
    def test_counts(self, client):
        for uid in ("RFID001", "RFID001", "RFID002", "UNKNOWN999"):
            tap(client, uid)

        resp = client.get("/api/analytics")

        assert resp.status_code == 200
        assert resp.json()["summary"] == {
            "totalStudents": 4,
            "paidStudents": 2,
            "unpaidStudents": 2,
            "activeCards": 2,
            "blockedCards": 2,
            "todayAccess": 4,
            "deniedAccess": 2,
        }

    def test_older_taps_are_not_counted_today(self, client, seeded_db):
        with seeded_db.get_connection() as conn:
            conn.execute(insert(access_logs).values(
                card_uid="RFID001", student_name="John Doe", timestamp=utcnow() - timedelta(days=2),
                access="allowed", reason="Valid access",
            ))
        tap(client, "RFID003")

        summary = client.get("/api/analytics").json()["summary"]
        assert summary["todayAccess"] == 1
        assert summary["deniedAccess"] == 1

    def test_requires_admin_token(self, anon_client):
        assert anon_client.get("/api/analytics").status_code == 401


class TestLogs:
    def test_newest_first(self, client):
        for uid in ("RFID001", "RFID002", "UNKNOWN999"):
            tap(client, uid)

        body = client.get("/api/logs").json()

        assert body["total"] == 3
        assert [log["cardUID"] for log in body["logs"]] == ["UNKNOWN999", "RFID002", "RFID001"]
        assert "studentName" not in body["logs"][0]
        assert body["logs"][1]["studentName"] == "Jane Smith"
        datetime.fromisoformat(body["logs"][2]["timestamp"])

    def test_filter_by_access(self, client):
        for uid in ("RFID001", "RFID002", "RFID003"):
            tap(client, uid)

        body = client.get("/api/logs", params={"access": "denied"}).json()

        assert body["total"] == 2
        assert {log["reason"] for log in body["logs"]} == {"Unpaid fees", "Card blocked"}

    def test_search_by_name_or_card(self, client):
        for uid in ("RFID001", "RFID002", "UNKNOWN999"):
            tap(client, uid)

        by_name = client.get("/api/logs", params={"search": "jane"}).json()
        by_card = client.get("/api/logs", params={"search": "UNKNOWN"}).json()

        assert [log["cardUID"] for log in by_name["logs"]] == ["RFID002"]
        assert [log["cardUID"] for log in by_card["logs"]] == ["UNKNOWN999"]

    def test_pagination(self, client):
        for _ in range(5):
            tap(client, "RFID001")

        body = client.get("/api/logs", params={"limit": 2, "offset": 2}).json()

        assert body["total"] == 5
        assert body["limit"] == 2
        assert body["offset"] == 2
        assert len(body["logs"]) == 2

    def test_invalid_access_filter(self, client):
        assert client.get("/api/logs", params={"access": "maybe"}).status_code == 422


class TestHealth:
    def test_liveness(self, anon_client):
        assert anon_client.get("/health").json() == {"status": "ok"}

    def test_api_health(self, anon_client):
        body = anon_client.get("/api/health").json()
        assert body["status"] == "ok"
        assert body["dataAvailable"] is True

    def test_startup_creates_schema(self):
        with patch.object(db_manager, "create_schema") as create_schema:
            with TestClient(app):
                create_schema.assert_called_once()
