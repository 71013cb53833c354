"""
Integration tests for the time entry endpoints.
"""

import pytest
from datetime import datetime, timedelta

API = "/api/v1"


class TestTimeEntriesAPI:
    """Test cases for /time-entries."""

    @pytest.fixture(autouse=True)
    def setup(self, api_client):
        self.api = api_client
        self.project_id = api_client.post(f"{API}/projects", json={"name": "Website"}).json()["id"]
        self.task_id = api_client.post(
            f"{API}/tasks", json={"title": "Design homepage", "projectId": self.project_id}
        ).json()["id"]

    def test_create_closed_entry(self):
        """Closed entries get a duration and the task's project."""
        response = self.api.post(f"{API}/time-entries", json={
            "taskId": self.task_id,
            "startTime": "2024-01-15T09:00:00",
            "endTime": "2024-01-15T10:30:00",
            "isBillable": True,
        })

        assert response.status_code == 201
        body = response.json()
        assert body["duration"] == 90
        assert body["is_running"] is False
        assert body["is_billable"] is True
        assert body["project_id"] == self.project_id
        assert body["task_name"] == "Design homepage"

    def test_end_before_start(self):
        """End time must be after start time."""
        response = self.api.post(f"{API}/time-entries", json={
            "task_id": self.task_id,
            "start_time": "2024-01-15T10:00:00",
            "end_time": "2024-01-15T09:00:00",
        })

        assert response.status_code == 422
        assert response.json()["details"][0]["field"] == "end_time"

    def test_unknown_task(self):
        """Entries need an existing task."""
        response = self.api.post(f"{API}/time-entries", json={"taskId": 999})
        assert response.status_code == 404

    def test_start_and_stop_timer(self):
        """A started timer runs until stopped."""
        started = self.api.post(f"{API}/time-entries/start", json={"taskId": self.task_id})

        assert started.status_code == 201
        entry = started.json()
        assert entry["is_running"] is True
        assert entry["duration"] is None

        end_time = (datetime.utcnow() + timedelta(minutes=30)).isoformat()
        stopped = self.api.post(f"{API}/time-entries/{entry['id']}/stop", json={"endTime": end_time})

        assert stopped.status_code == 200
        assert stopped.json()["is_running"] is False
        assert stopped.json()["duration"] == 30

    def test_only_one_running_timer(self):
        """A second timer cannot start while one is running."""
        self.api.post(f"{API}/time-entries/start", json={"taskId": self.task_id})

        response = self.api.post(f"{API}/time-entries/start", json={"taskId": self.task_id})

        assert response.status_code == 400
        assert response.json()["code"] == "BUSINESS_RULE_VIOLATION"

    def test_stop_stopped_entry(self):
        """Stopping twice is a business rule violation."""
        entry_id = self.api.post(f"{API}/time-entries/start", json={"taskId": self.task_id}).json()["id"]
        end_time = (datetime.utcnow() + timedelta(minutes=5)).isoformat()
        self.api.post(f"{API}/time-entries/{entry_id}/stop", json={"end_time": end_time})

        response = self.api.post(f"{API}/time-entries/{entry_id}/stop")

        assert response.status_code == 400
        assert response.json()["message"] == "Timer is not running"

    def test_update_running_entry_needs_end_time(self):
        """Running entries cannot be edited without stopping them."""
        entry_id = self.api.post(f"{API}/time-entries/start", json={"taskId": self.task_id}).json()["id"]

        response = self.api.patch(f"{API}/time-entries/{entry_id}", json={"description": "Calls"})

        assert response.status_code == 400

    def test_list_running_entries(self):
        """Entries can be filtered by running state."""
        self.api.post(f"{API}/time-entries", json={
            "taskId": self.task_id,
            "startTime": "2024-01-15T09:00:00",
            "endTime": "2024-01-15T10:00:00",
        })
        self.api.post(f"{API}/time-entries/start", json={"taskId": self.task_id})

        body = self.api.get(f"{API}/time-entries", params={"running": "true"}).json()

        assert body["total"] == 1
        assert body["items"][0]["is_running"] is True

    def test_delete_entry(self):
        """Entries can be deleted."""
        entry_id = self.api.post(f"{API}/time-entries", json={
            "taskId": self.task_id,
            "startTime": "2024-01-15T09:00:00",
            "endTime": "2024-01-15T10:00:00",
        }).json()["id"]

        assert self.api.delete(f"{API}/time-entries/{entry_id}").status_code == 204
        assert self.api.get(f"{API}/time-entries/{entry_id}").status_code == 404

    def _log(self, start: str, end: str):
        return self.api.post(f"{API}/time-entries", json={
            "taskId": self.task_id, "startTime": start, "endTime": end,
        }).json()

    def test_stopped_entry_cannot_be_reopened(self):
        """Clearing the end time of a stopped entry is rejected."""
        entry_id = self._log("2024-01-15T09:00:00", "2024-01-15T10:00:00")["id"]
        self.api.post(f"{API}/time-entries/start", json={"taskId": self.task_id})

        response = self.api.patch(f"{API}/time-entries/{entry_id}", json={"endTime": None})

        assert response.status_code == 422
        assert response.json()["details"][0]["field"] == "end_time"
        running = self.api.get(f"{API}/time-entries", params={"running": "true"}).json()
        assert running["total"] == 1

    def test_start_timer_with_blank_project(self):
        """An empty project id falls back to the task's project."""
        response = self.api.post(f"{API}/time-entries/start", json={"taskId": self.task_id, "projectId": ""})

        assert response.status_code == 201
        assert response.json()["project_id"] == self.project_id

    def test_duration_totals(self):
        """Totals cover stopped entries, overall, per task and per project."""
        self._log("2024-01-15T09:00:00", "2024-01-15T10:30:00")
        self._log("2024-01-16T09:00:00", "2024-01-16T09:45:00")
        self.api.post(f"{API}/time-entries/start", json={"taskId": self.task_id})

        total = self.api.get(f"{API}/time-entries/duration/total").json()
        task = self.api.get(f"{API}/time-entries/duration/task/{self.task_id}").json()
        project = self.api.get(f"{API}/time-entries/duration/project/{self.project_id}").json()

        assert total == {"minutes": 135, "hours": 2.25}
        assert task == total
        assert project == total

    def test_duration_total_in_range(self):
        """A range limits the total to entries started inside it."""
        self._log("2024-01-15T09:00:00", "2024-01-15T10:00:00")
        self._log("2024-02-15T09:00:00", "2024-02-15T09:30:00")

        body = self.api.get(f"{API}/time-entries/duration/total", params={
            "start_date": "2024-02-01T00:00:00",
            "end_date": "2024-02-28T00:00:00",
        }).json()

        assert body["minutes"] == 30

    def test_duration_of_unknown_task_or_project(self):
        """Unknown tasks and projects are not found."""
        assert self.api.get(f"{API}/time-entries/duration/task/999").status_code == 404
        assert self.api.get(f"{API}/time-entries/duration/project/999").status_code == 404

    def test_duration_by_date(self):
        """Time is grouped per day, latest day first."""
        self._log("2024-01-15T09:00:00", "2024-01-15T10:00:00")
        self._log("2024-01-15T14:00:00", "2024-01-15T14:30:00")
        self._log("2024-01-16T09:00:00", "2024-01-16T09:15:00")

        response = self.api.get(f"{API}/time-entries/duration/by-date", params={
            "start_date": "2024-01-01T00:00:00",
            "end_date": "2024-01-31T00:00:00",
        })

        assert response.status_code == 200
        assert response.json() == [
            {"date": "2024-01-16", "total_duration": 15, "entry_count": 1},
            {"date": "2024-01-15", "total_duration": 90, "entry_count": 2},
        ]

    def test_duration_by_date_needs_range(self):
        """The per-day breakdown requires both dates."""
        response = self.api.get(f"{API}/time-entries/duration/by-date", params={"start_date": "2024-01-01T00:00:00"})

        assert response.status_code == 422
        assert response.json()["details"][0]["field"] == "end_date"

    def test_summary(self):
        """The summary has totals, days and running timers."""
        self._log("2024-01-15T09:00:00", "2024-01-15T10:00:00")
        timer_id = self.api.post(f"{API}/time-entries/start", json={"taskId": self.task_id}).json()["id"]

        response = self.api.get(f"{API}/time-entries/summary")

        assert response.status_code == 200
        body = response.json()
        assert body["total_duration"] == {"minutes": 60, "hours": 1.0}
        assert body["duration_by_date"] == [{"date": "2024-01-15", "total_duration": 60, "entry_count": 1}]
        assert [entry["id"] for entry in body["running_timers"]] == [timer_id]


class TestHealthAPI:
    """Test cases for the health endpoint."""

    def test_health(self, api_client):
        """The health check reports the service as healthy."""
        response = api_client.get(f"{API}/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
