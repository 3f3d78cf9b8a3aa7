"""
Integration tests for the bay scheduling API routes.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from bay_scheduler.core.config import settings
from bay_scheduler.main import create_app

API = settings.API_V1_STR
EDITOR = {"X-User-Role": "editor"}
VIEWER = {"X-User-Role": "viewer"}


@pytest.fixture
def client(store):
    return TestClient(create_app(store))


class TestHealth:
    def test_health(self, client):
        response = client.get(f"{API}/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["store"] == {"bays": 2, "projects": 1, "assignments": 1}
        assert "X-Correlation-ID" in response.headers


class TestConflictCheck:
    def test_conflict_found(self, client):
        response = client.get(
            f"{API}/bays/1/conflicts",
            params={"start_date": "2025-02-08", "end_date": "2025-02-20"},
            headers=VIEWER,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["has_conflict"] is True
        assert body["conflicting_assignment"]["id"] == 5

    def test_excluded_assignment(self, client):
        response = client.get(
            f"{API}/bays/1/conflicts",
            params={"start_date": "2025-02-01", "end_date": "2025-02-20", "exclude_id": 5},
            headers=VIEWER,
        )
        assert response.json() == {"has_conflict": False, "conflicting_assignment": None}

    def test_unknown_bay(self, client):
        response = client.get(
            f"{API}/bays/99/conflicts",
            params={"start_date": "2025-02-01", "end_date": "2025-02-20"},
            headers=VIEWER,
        )
        assert response.status_code == 404
        assert response.json()["detail"]["type"] == "not_found"

    def test_missing_role_is_forbidden(self, client):
        response = client.get(
            f"{API}/bays/1/conflicts",
            params={"start_date": "2025-02-01", "end_date": "2025-02-20"},
        )
        assert response.status_code == 403
        assert response.json()["detail"]["type"] == "authorization"


class TestScheduleWrites:
    def test_create(self, client):
        response = client.post(
            f"{API}/schedules",
            json={"project_id": 10, "bay_id": 2, "start_date": "2025-06-01", "grid_scale": "day"},
            headers=EDITOR,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["bay_id"] == 2
        assert body["end_date"] == "2025-06-08"
        assert body["status"] == "scheduled"

    def test_create_conflict(self, client, store):
        response = client.post(
            f"{API}/schedules",
            json={"project_id": 10, "bay_id": 1, "start_date": "2025-02-05"},
            headers=EDITOR,
        )

        assert response.status_code == 409
        detail = response.json()["detail"]
        assert detail["type"] == "resource_conflict"
        assert detail["details"]["conflicting_assignment_id"] == 5
        assert len(store.list_assignments()) == 1

    def test_create_invalid_duration(self, client):
        response = client.post(
            f"{API}/schedules",
            json={"project_id": 10, "bay_id": 2, "start_date": "2025-06-01", "duration_days": 0},
            headers=EDITOR,
        )
        assert response.status_code == 400
        assert response.json()["detail"]["type"] == "validation"

    def test_viewer_cannot_create(self, client):
        response = client.post(
            f"{API}/schedules",
            json={"project_id": 10, "bay_id": 2, "start_date": "2025-06-01"},
            headers=VIEWER,
        )
        assert response.status_code == 403

    def test_move(self, client, store):
        response = client.put(
            f"{API}/schedules/5/move",
            json={"bay_id": 2, "start_date": "2025-03-01"},
            headers=EDITOR,
        )

        assert response.status_code == 200
        assert response.json()["end_date"] == "2025-03-08"
        assert store.get_assignment(5).bay_id == 2

    def test_move_unknown_assignment(self, client):
        response = client.put(
            f"{API}/schedules/77/move",
            json={"bay_id": 2, "start_date": "2025-03-01"},
            headers=EDITOR,
        )
        assert response.status_code == 404

    def test_status_change(self, client):
        response = client.patch(
            f"{API}/schedules/5/status", json={"status": "complete"}, headers=EDITOR
        )
        assert response.status_code == 200
        assert response.json()["status"] == "complete"

    def test_delete(self, client, store):
        response = client.delete(f"{API}/schedules/5", headers=EDITOR)

        assert response.status_code == 200
        assert response.json()["id"] == 5
        assert store.get_assignment(5) is None
        assert client.delete(f"{API}/schedules/5", headers=EDITOR).status_code == 404

    def test_list(self, client):
        response = client.get(f"{API}/schedules", params={"bay_id": 1}, headers=VIEWER)
        assert [a["id"] for a in response.json()] == [5]


class TestReports:
    def test_occupancy_utilization(self, client):
        response = client.get(
            f"{API}/utilization", params={"as_of": "2025-02-01"}, headers=VIEWER
        )

        body = response.json()
        assert response.status_code == 200
        assert body["model"] == "occupancy"
        assert body["is_system_of_record"] is True
        assert body["bay_utilization"] == {"1": 50.0, "2": 0.0}
        assert body["fleet_utilization"] == 25.0
        assert body["fleet_status"]["status"] == "Mixed Capacity"

    def test_peak_load_utilization(self, client):
        response = client.get(
            f"{API}/utilization",
            params={"model": "peak_load", "as_of": "2025-02-03"},
            headers=VIEWER,
        )

        body = response.json()
        assert body["model"] == "peak_load"
        assert body["is_system_of_record"] is False
        assert body["fleet_status"] is None
        assert {a["bay_id"] for a in body["assessments"]} == {1, 2}
        assert body["load_insight"]

    def test_hours_flow(self, client):
        response = client.get(
            f"{API}/hours-flow",
            params={
                "year": 2025,
                "granularity": "month",
                "timeframe": "future",
                "as_of": "2025-01-15",
            },
            headers=VIEWER,
        )

        body = response.json()
        assert response.status_code == 200
        assert body["points"][0]["period"] == "Jan"
        assert len(body["points"]) == 12
        assert body["points"][1]["projected"] == 1000

    def test_hours_flow_rejects_bad_year(self, client):
        response = client.get(
            f"{API}/hours-flow", params={"year": 99999}, headers=VIEWER
        )
        assert response.status_code == 422

    def test_weekly_utilization(self, client):
        response = client.get(
            f"{API}/utilization/weekly",
            params={"start": date(2025, 2, 3).isoformat(), "weeks": 2},
            headers=VIEWER,
        )
        assert response.status_code == 200
        assert len(response.json()) == 4

    def test_pending_user_cannot_view_reports(self, client):
        response = client.get(
            f"{API}/utilization", headers={"X-User-Role": "pending"}
        )
        assert response.status_code == 403
