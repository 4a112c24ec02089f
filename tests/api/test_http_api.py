from __future__ import annotations

import pytest

from technician_scheduler.core.exceptions import PersistenceError
from technician_scheduler.main import create_app


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    return app.test_client()


@pytest.fixture
def seeded(client):
    a = client.post("/api/technicians", json={"code": "TK001", "name": "Agus Tri"}).get_json()
    b = client.post("/api/technicians", json={"code": "TK002", "name": "Budi Tanjung"}).get_json()
    p = client.post(
        "/api/projects",
        json={
            "name": "Instalasi CCTV",
            "jobCode": "JOB-0001",
            "location": "Jakarta",
            "startDate": "2024-01-01",
            "deadline": "2024-01-31",
            "sigmaTeknisi": 2,
            "sigmaHari": 5,
            "sigmaManDays": 10,
        },
    ).get_json()
    return a["technicianId"], b["technicianId"], p["projectId"]


def test_technician_directory(client, seeded):
    res = client.get("/api/technicians")

    assert res.status_code == 200
    assert [(t["code"], t["initials"]) for t in res.get_json()["technicians"]] == [("TK001", "AT"), ("TK002", "BT")]


def test_create_project_rejects_bad_date(client):
    res = client.post("/api/projects", json={"name": "X", "jobCode": "J", "startDate": "2024-02-30", "deadline": "2024-03-01"})

    assert res.status_code == 400
    assert "error" in res.get_json()


def test_submit_and_read_assignments(client, seeded):
    a, b, p = seeded

    res = client.post(
        "/api/assignments",
        json={
            "date": "2024-01-01",
            "items": [
                {"projectId": p, "technicianId": a, "isSelected": True, "isProjectLeader": True},
                {"projectId": p, "technicianId": b, "isSelected": True, "isLeader": False},
                {"projectId": p, "technicianId": 999, "isSelected": True},
            ],
        },
    )
    body = res.get_json()

    assert res.status_code == 200
    assert body["appliedCount"] == 2
    assert body["skippedPairs"] == 1

    cells = client.get("/api/assignments?date=2024-01-02").get_json()["assignments"]
    assert {(c["technicianId"], c["isLeader"]) for c in cells} == {(a, True), (b, False)}
    assert all(c["isSelected"] for c in cells)

    raw = client.get(f"/api/attendance?date=2024-01-01&projectId={p}").get_json()["attendance"]
    assert len(raw) == 2


def test_submit_rejects_malformed_payload(client, seeded):
    assert client.post("/api/assignments", data="nope", content_type="application/json").status_code == 400
    assert client.post("/api/assignments", json={"items": [{"projectId": "x", "technicianId": 1}]}).status_code == 400
    assert client.post("/api/assignments", json={"date": "01-01-2024", "items": []}).status_code == 400


def test_status_edits_map_errors(client, seeded):
    _, _, p = seeded

    assert client.put(f"/api/projects/{p}/status", json={"status": "pending", "reason": "abc"}).status_code == 400
    assert client.put("/api/projects/999/status", json={"status": "ongoing"}).status_code == 404

    done = client.put(f"/api/projects/{p}/status", json={"status": "completed"})
    assert done.status_code == 200
    assert done.get_json()["project"]["status"] == "completed"

    assert client.put(f"/api/projects/{p}/status", json={"status": "ongoing"}).status_code == 409


def test_project_board_and_lookup(client, seeded):
    a, _, p = seeded
    client.post("/api/assignments", json={"date": "2024-01-01", "items": [{"projectId": p, "technicianId": a}]})

    board = client.get("/api/projects?date=2024-01-02").get_json()["projects"]
    assert board[0]["daysElapsed"] == 2
    assert board[0]["actualManDays"] == 1
    assert board[0]["projectStatus"] == "ongoing"

    assert client.get("/api/projects/by-job-code/JOB-0001").get_json()["projectId"] == p
    assert client.get("/api/projects/by-job-code/NOPE").status_code == 404


def test_technician_jobs_endpoint(client, seeded):
    a, _, p = seeded
    client.post("/api/assignments", json={"date": "2024-01-01", "items": [{"projectId": p, "technicianId": a}]})

    body = client.get("/api/technicians/jobs?technician=TK001").get_json()

    assert body["jobs"][0]["status"] == "in-progress"
    assert body["jobs"][0]["progress"] == 50
    assert [t["code"] for t in client.get("/api/technicians/idle").get_json()["technicians"]] == ["TK002"]


def test_report_exports(client, seeded):
    a, _, p = seeded
    client.post("/api/assignments", json={"date": "2024-01-01", "items": [{"projectId": p, "technicianId": a, "isLeader": True}]})

    as_json = client.get("/api/reports/man-days/JOB-0001").get_json()
    assert as_json["summary"][0]["days_worked"] == 1

    as_csv = client.get("/api/reports/man-days/JOB-0001?format=csv")
    assert as_csv.mimetype == "text/csv"
    assert as_csv.data.startswith(b"\xef\xbb\xbfwork_date,")

    as_xlsx = client.get("/api/reports/man-days/JOB-0001?format=xlsx")
    assert as_xlsx.status_code == 200
    assert as_xlsx.data[:2] == b"PK"

    assert client.get("/api/reports/man-days/JOB-0001?format=pdf").status_code == 400


def test_day_endpoints(client):
    first = client.post("/api/days/advance", json={"date": "2024-01-02"}).get_json()
    again = client.post("/api/days/advance", json={"date": "2024-01-02"}).get_json()

    assert (first["advanced"], again["advanced"]) == (True, False)
    current = client.get("/api/days/current").get_json()
    assert current["lastOpened"] == "2024-01-02"
    assert current["timezone"] == "Asia/Jakarta"


def test_unexpected_errors_are_500(client, container, monkeypatch):
    def boom(**kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(container.assignment_service, "get_effective_assignments", boom)

    res = client.get("/api/assignments?date=2024-01-01")
    assert res.status_code == 500
    assert res.get_json() == {"error": "Kesalahan sistem"}


def test_persistence_errors_are_503(client, container, seeded, monkeypatch):
    _, _, p = seeded

    def unavailable(**kwargs):
        raise PersistenceError("database sedang tidak tersedia")

    monkeypatch.setattr(container.project_service, "set_status", unavailable)

    assert client.put(f"/api/projects/{p}/status", json={"status": "ongoing"}).status_code == 503
