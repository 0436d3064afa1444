"""
API tests for attendance recording (upsert on student + date).
"""


def student_ids(client):
    return {s["cardUID"]: s["id"] for s in client.get("/api/students").json()}


class TestSaveAttendance:
    def test_resubmission_does_not_duplicate(self, client):
        sid = student_ids(client)["RFID001"]
        payload = {"records": [{"studentId": sid, "status": "present", "date": "2024-01-15"}]}

        assert client.post("/api/attendance", json=payload).status_code == 200
        assert client.post("/api/attendance", json=payload).status_code == 200

        records = client.get("/api/attendance", params={"date": "2024-01-15"}).json()
        assert len(records) == 1
        assert records[0]["studentId"] == sid
        assert records[0]["status"] == "present"

    def test_resubmission_overwrites_status(self, client):
        sid = student_ids(client)["RFID002"]
        client.post("/api/attendance", json={"records": [{"studentId": sid, "status": "present", "date": "2024-01-15"}]})
        client.post("/api/attendance", json={"records": [{"studentId": sid, "status": "absent", "date": "2024-01-15"}]})

        records = client.get("/api/attendance", params={"date": "2024-01-15"}).json()
        assert [(r["studentId"], r["status"]) for r in records] == [(sid, "absent")]

    def test_batch_for_a_class(self, client):
        ids = student_ids(client)
        payload = {"records": [
            {"studentId": ids["RFID001"], "status": "present", "date": "2024-01-15"},
            {"studentId": ids["RFID002"], "status": "absent", "date": "2024-01-15"},
            {"studentId": ids["RFID001"], "status": "absent", "date": "2024-01-16"},
        ]}

        resp = client.post("/api/attendance", json=payload)

        assert resp.status_code == 200
        assert resp.json() == {"success": True, "saved": 3}
        assert len(client.get("/api/attendance", params={"date": "2024-01-15"}).json()) == 2
        assert len(client.get("/api/attendance", params={"date": "2024-01-16"}).json()) == 1

    def test_unknown_student(self, client):
        resp = client.post(
            "/api/attendance",
            json={"records": [{"studentId": 9999, "status": "present", "date": "2024-01-15"}]},
        )

        assert resp.status_code == 404
        assert client.get("/api/attendance", params={"date": "2024-01-15"}).json() == []

    def test_invalid_status(self, client):
        sid = student_ids(client)["RFID001"]
        resp = client.post(
            "/api/attendance",
            json={"records": [{"studentId": sid, "status": "late", "date": "2024-01-15"}]},
        )
        assert resp.status_code == 422

    def test_empty_batch(self, client):
        resp = client.post("/api/attendance", json={"records": []})
        assert resp.json() == {"success": True, "saved": 0}


class TestGetAttendance:
    def test_date_is_required(self, client):
        assert client.get("/api/attendance").status_code == 422

    def test_no_records(self, client):
        resp = client.get("/api/attendance", params={"date": "2030-01-01"})
        assert resp.status_code == 200
        assert resp.json() == []

    def test_deleting_student_drops_attendance(self, client):
        sid = student_ids(client)["RFID003"]
        client.post("/api/attendance", json={"records": [{"studentId": sid, "status": "present", "date": "2024-01-15"}]})

        client.delete(f"/api/students/{sid}")

        assert client.get("/api/attendance", params={"date": "2024-01-15"}).json() == []
