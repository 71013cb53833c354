"""
Unit tests for Task and Project domain models.
"""

import pytest
from datetime import datetime, timedelta

from bizdesk.domain.models.base import ValidationError
from bizdesk.domain.models.project import Project, ProjectStatus
from bizdesk.domain.models.task import Task, TaskStatus, TaskPriority


class TestTask:
    """Test cases for Task entity."""

    def setup_method(self):
        """Set up test fixtures."""
        self.task = Task(id=1, project_id=1, title="Design homepage")

    def test_defaults(self):
        """Tasks start pending with medium priority."""
        assert self.task.status == TaskStatus.PENDING
        assert self.task.priority == TaskPriority.MEDIUM

    def test_validate_title(self):
        """Tasks need a title."""
        self.task.title = ""
        with pytest.raises(ValidationError, match="Task title is required"):
            self.task.validate()

    def test_open_task_moves_freely(self):
        """Open tasks may move to any status."""
        self.task.change_status(TaskStatus.DONE)
        assert self.task.is_completed

    def test_completed_task_can_only_reopen_in_progress(self):
        """Finished tasks can go back to in-progress only."""
        self.task.status = TaskStatus.COMPLETED

        with pytest.raises(ValidationError, match="Cannot transition from completed to pending"):
            self.task.change_status(TaskStatus.PENDING)

        self.task.change_status(TaskStatus.IN_PROGRESS)
        assert self.task.status == TaskStatus.IN_PROGRESS

    def test_cancelled_task_can_only_return_to_pending(self):
        """Cancelled tasks can only be reset to pending."""
        self.task.status = TaskStatus.CANCELLED

        assert not self.task.can_transition_to("done")
        assert self.task.can_transition_to("pending")

    def test_is_overdue(self):
        """Open tasks past their due date are overdue."""
        self.task.due_date = datetime.utcnow() - timedelta(days=1)
        assert self.task.is_overdue

        self.task.status = TaskStatus.DONE
        assert not self.task.is_overdue

    def test_high_priority(self):
        """High and urgent tasks are high priority."""
        assert not self.task.is_high_priority
        self.task.apply_changes({"priority": "urgent"})
        assert self.task.is_high_priority


class TestProject:
    """Test cases for Project entity."""

    def test_validate_name(self):
        """Projects need a name."""
        with pytest.raises(ValidationError, match="Project name is required"):
            Project(name="  ").validate()

    def test_validate_dates(self):
        """The end date cannot precede the start date."""
        project = Project(name="Website", start_date=datetime(2024, 6, 1), end_date=datetime(2024, 1, 1))
        with pytest.raises(ValidationError, match="End date"):
            project.validate()

    def test_apply_changes(self):
        """Status strings are coerced on update."""
        project = Project(name="Website")
        project.apply_changes({"status": "on-hold"})

        assert project.status is ProjectStatus.ON_HOLD
        assert not project.is_active
