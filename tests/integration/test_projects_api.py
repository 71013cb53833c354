"""
Integration tests for the project and task endpoints.
"""

from datetime import datetime, timedelta

import pytest

API = "/api/v1"


class TestProjectsAPI:
    """Test cases for /projects."""

    @pytest.fixture(autouse=True)
    def setup(self, api_client, client_id):
        self.api = api_client
        self.client_id = client_id

    def test_create_project(self):
        """Projects are created active with their client name."""
        response = self.api.post(f"{API}/projects", json={
            "name": "Website",
            "clientId": self.client_id,
            "startDate": "2024-01-01T00:00:00",
        })

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "active"
        assert body["client_name"] == "Acme Corp"
        assert body["start_date"] == "2024-01-01T00:00:00"

    def test_end_before_start(self):
        """Date order is validated."""
        response = self.api.post(f"{API}/projects", json={
            "name": "Website",
            "start_date": "2024-06-01T00:00:00",
            "end_date": "2024-01-01T00:00:00",
        })

        assert response.status_code == 422
        assert response.json()["details"][0]["field"] == "end_date"

    def test_unknown_client(self):
        """Project clients must exist."""
        response = self.api.post(f"{API}/projects", json={"name": "Website", "clientId": 999})
        assert response.status_code == 404

    def test_update_and_list(self):
        """Updated projects are found by their new status."""
        project_id = self.api.post(f"{API}/projects", json={"name": "Website"}).json()["id"]
        self.api.post(f"{API}/projects", json={"name": "Shop"})

        response = self.api.patch(f"{API}/projects/{project_id}", json={"status": "on-hold"})
        assert response.status_code == 200
        assert response.json()["name"] == "Website"

        listed = self.api.get(f"{API}/projects", params={"status": "on-hold"}).json()
        assert listed["total"] == 1
        assert listed["items"][0]["id"] == project_id

    def test_delete_project(self):
        """Projects can be deleted."""
        project_id = self.api.post(f"{API}/projects", json={"name": "Website"}).json()["id"]

        assert self.api.delete(f"{API}/projects/{project_id}").status_code == 204
        assert self.api.get(f"{API}/projects/{project_id}").status_code == 404

    def test_blank_client_clears_client(self):
        """An empty client id in a patch removes the client."""
        project_id = self.api.post(f"{API}/projects", json={"name": "Website", "clientId": self.client_id}).json()["id"]

        response = self.api.patch(f"{API}/projects/{project_id}", json={"clientId": ""})

        assert response.status_code == 200
        assert response.json()["client_id"] is None

    def test_overdue_projects(self):
        """Open projects past their end date are overdue; closed ones are not."""
        past = {"startDate": "2020-01-01T00:00:00", "endDate": "2020-02-01T00:00:00"}
        late_id = self.api.post(f"{API}/projects", json={"name": "Late", **past}).json()["id"]
        self.api.post(f"{API}/projects", json={"name": "Shipped", "status": "completed", **past})
        self.api.post(f"{API}/projects", json={"name": "Future", "endDate": "2099-01-01T00:00:00"})

        response = self.api.get(f"{API}/projects/overdue")

        assert response.status_code == 200
        assert [project["id"] for project in response.json()] == [late_id]

    def test_search_projects(self):
        """Search matches names and descriptions without regard to case."""
        self.api.post(f"{API}/projects", json={"name": "Website redesign"})
        self.api.post(f"{API}/projects", json={"name": "Shop", "description": "New WEBSITE checkout"})
        self.api.post(f"{API}/projects", json={"name": "Logo"})

        body = self.api.get(f"{API}/projects/search", params={"q": "website"}).json()

        assert {project["name"] for project in body} == {"Website redesign", "Shop"}

    def test_search_requires_term(self):
        """A blank search term is rejected."""
        response = self.api.get(f"{API}/projects/search", params={"q": "  "})
        assert response.status_code == 422

    def test_project_stats(self):
        """Every status is counted, including empty ones."""
        self.api.post(f"{API}/projects", json={"name": "Website"})
        self.api.post(f"{API}/projects", json={"name": "Shop", "status": "on-hold"})

        body = self.api.get(f"{API}/projects/stats").json()

        assert body == {"active": 1, "completed": 0, "on-hold": 1, "cancelled": 0}


class TestTasksAPI:
    """Test cases for /tasks."""

    @pytest.fixture(autouse=True)
    def setup(self, api_client):
        self.api = api_client
        self.project_id = api_client.post(f"{API}/projects", json={"name": "Website"}).json()["id"]

    def _create(self, **data):
        return self.api.post(f"{API}/tasks", json={"title": "Design homepage", "projectId": self.project_id, **data})

    def test_create_task(self):
        """Tasks default to pending and medium priority."""
        response = self._create(dueDate="2099-01-01T00:00:00")

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pending"
        assert body["priority"] == "medium"
        assert body["project_name"] == "Website"
        assert body["is_overdue"] is False
        assert body["is_high_priority"] is False

    def test_unknown_project(self):
        """Task projects must exist."""
        response = self.api.post(f"{API}/tasks", json={"title": "Orphan", "projectId": 999})
        assert response.status_code == 404

    def test_completed_task_cannot_return_to_pending(self):
        """Completed tasks may only be reopened in progress."""
        task_id = self._create(status="completed").json()["id"]

        rejected = self.api.patch(f"{API}/tasks/{task_id}", json={"status": "pending"})
        assert rejected.status_code == 422

        reopened = self.api.patch(f"{API}/tasks/{task_id}", json={"status": "in-progress"})
        assert reopened.status_code == 200
        assert reopened.json()["status"] == "in-progress"

    def test_list_by_priority(self):
        """Tasks can be filtered by priority."""
        self._create(priority="urgent")
        self._create()

        body = self.api.get(f"{API}/tasks", params={"priority": "urgent"}).json()

        assert body["total"] == 1
        assert body["items"][0]["is_high_priority"] is True

    def test_delete_task(self):
        """Tasks can be deleted."""
        task_id = self._create().json()["id"]

        assert self.api.delete(f"{API}/tasks/{task_id}").status_code == 204
        assert self.api.get(f"{API}/tasks/{task_id}").status_code == 404

    def test_overdue_tasks(self):
        """Open tasks past their due date are overdue; finished ones are not."""
        late_id = self._create(title="Late", dueDate="2020-01-01T00:00:00").json()["id"]
        self._create(title="Done late", dueDate="2020-01-01T00:00:00", status="done")
        self._create(title="Undated")

        body = self.api.get(f"{API}/tasks/overdue").json()

        assert [task["id"] for task in body] == [late_id]
        assert body[0]["is_overdue"] is True

    def test_tasks_due_soon(self):
        """Only open tasks due inside the window are listed."""
        soon = (datetime.utcnow() + timedelta(days=2)).isoformat()
        later = (datetime.utcnow() + timedelta(days=20)).isoformat()
        soon_id = self._create(title="Soon", dueDate=soon).json()["id"]
        self._create(title="Later", dueDate=later)
        self._create(title="Late", dueDate="2020-01-01T00:00:00")

        assert [task["id"] for task in self.api.get(f"{API}/tasks/due-soon").json()] == [soon_id]
        assert len(self.api.get(f"{API}/tasks/due-soon", params={"days": 30}).json()) == 2

    def test_due_soon_rejects_zero_days(self):
        """The window must be at least one day."""
        assert self.api.get(f"{API}/tasks/due-soon", params={"days": 0}).status_code == 422

    def test_search_tasks(self):
        """Search matches titles and descriptions; undated tasks come last."""
        undated_id = self._create(title="Homepage copy").json()["id"]
        dated_id = self._create(title="Review", description="Check the homepage", dueDate="2099-01-01T00:00:00").json()["id"]
        self._create(title="Invoice client")

        body = self.api.get(f"{API}/tasks/search", params={"q": "HOMEPAGE"}).json()

        assert [task["id"] for task in body] == [dated_id, undated_id]

    def test_task_counts(self):
        """Status and priority counts cover every value."""
        self._create(priority="urgent")
        self._create(status="in-progress")

        statuses = self.api.get(f"{API}/tasks/stats/status").json()
        priorities = self.api.get(f"{API}/tasks/stats/priority").json()

        assert statuses == {"pending": 1, "in-progress": 1, "done": 0, "completed": 0, "cancelled": 0}
        assert priorities == {"low": 0, "medium": 1, "high": 0, "urgent": 1}
