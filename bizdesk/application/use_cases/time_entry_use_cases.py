"""
Time entry use cases for the application layer.
Implements business logic for time tracking, including the running timer.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from bizdesk.application.dto.time_entry_dto import (
    CreateTimeEntryRequestDTO, UpdateTimeEntryRequestDTO,
    StartTimerRequestDTO, StopTimerRequestDTO
)
from bizdesk.application.use_cases.base_use_case import BaseUseCase, ListResult
from bizdesk.config import settings
from bizdesk.domain.models.base import BusinessRuleViolation, ValidationError
from bizdesk.domain.models.task import Task
from bizdesk.domain.models.time_entry import TimeEntry
from bizdesk.domain.repositories.project_repository import ProjectRepository
from bizdesk.domain.repositories.task_repository import TaskRepository
from bizdesk.domain.repositories.time_entry_repository import TimeEntryRepository

logger = logging.getLogger(__name__)


class _TimeEntryUseCase(BaseUseCase):
    """Shared wiring for time entry use cases."""

    def __init__(
        self,
        time_entry_repository: TimeEntryRepository,
        task_repository: Optional[TaskRepository] = None,
        project_repository: Optional[ProjectRepository] = None
    ):
        self.time_entry_repository = time_entry_repository
        self.task_repository = task_repository
        self.project_repository = project_repository

    def _get_task(self, task_id: int) -> Task:
        return self._require(self.task_repository.get_by_id(task_id), "Task", task_id)

    def _ensure_no_running_timer(self) -> None:
        running = self.time_entry_repository.get_running()
        if running is not None:
            logger.warning(f"Rejected new timer while entry {running.id} is running")
            raise BusinessRuleViolation(
                f"A timer is already running (time entry {running.id}). Stop it first."
            )


class CreateTimeEntryUseCase(_TimeEntryUseCase):
    """Use case for logging a time entry."""

    def execute(self, request: CreateTimeEntryRequestDTO) -> TimeEntry:
        # Verify references
        task = self._get_task(request.task_id)
        self._ensure_reference(self.project_repository, "Project", request.project_id)

        data = request.to_domain_dict()
        if data.get("project_id") is None:
            data["project_id"] = task.project_id

        entry = TimeEntry(**data)
        if entry.is_running:
            self._ensure_no_running_timer()
        entry.validate()

        # Save entry
        saved_entry = self.time_entry_repository.save(entry)
        logger.info(f"Created time entry {saved_entry.id} for task {saved_entry.task_id}")

        return self.time_entry_repository.get_by_id(saved_entry.id)


class UpdateTimeEntryUseCase(_TimeEntryUseCase):
    """Use case for updating a time entry."""

    def execute(self, entry_id: int, request: UpdateTimeEntryRequestDTO) -> TimeEntry:
        # Get entry
        entry = self._require(self.time_entry_repository.get_by_id(entry_id), "TimeEntry", entry_id)
        changes = request.to_patch()

        if "task_id" in changes:
            self._get_task(changes["task_id"])
        if "project_id" in changes:
            self._ensure_reference(self.project_repository, "Project", changes["project_id"])

        entry.apply_changes(changes)
        entry.validate()

        # Save entry
        self.time_entry_repository.save(entry)
        logger.info(f"Updated time entry {entry.id}: {sorted(changes)}")

        return self.time_entry_repository.get_by_id(entry.id)


class StartTimerUseCase(_TimeEntryUseCase):
    """Use case for starting a timer on a task."""

    def execute(self, request: StartTimerRequestDTO) -> TimeEntry:
        task = self._get_task(request.task_id)
        self._ensure_reference(self.project_repository, "Project", request.project_id)
        self._ensure_no_running_timer()

        entry = TimeEntry(
            task_id=task.id,
            project_id=request.project_id or task.project_id,
            description=request.description,
            start_time=datetime.utcnow(),
            is_billable=request.is_billable
        )
        entry.validate()

        saved_entry = self.time_entry_repository.save(entry)
        logger.info(f"Started timer {saved_entry.id} on task {task.id}")

        return self.time_entry_repository.get_by_id(saved_entry.id)


class StopTimerUseCase(_TimeEntryUseCase):
    """Use case for stopping a running timer."""

    def execute(self, entry_id: int, request: Optional[StopTimerRequestDTO] = None) -> TimeEntry:
        entry = self._require(self.time_entry_repository.get_by_id(entry_id), "TimeEntry", entry_id)

        entry.stop(request.end_time if request else None)

        self.time_entry_repository.save(entry)
        logger.info(f"Stopped timer {entry.id} after {entry.duration} minutes")

        return self.time_entry_repository.get_by_id(entry.id)


class GetTimeEntryUseCase(_TimeEntryUseCase):
    """Use case for getting a time entry by ID."""

    def execute(self, entry_id: int) -> TimeEntry:
        return self._require(self.time_entry_repository.get_by_id(entry_id), "TimeEntry", entry_id)


class ListTimeEntriesUseCase(_TimeEntryUseCase):
    """Use case for listing time entries."""

    def execute(
        self,
        task_id: Optional[int] = None,
        project_id: Optional[int] = None,
        running: Optional[bool] = None,
        limit: int = settings.default_page_size,
        offset: int = 0
    ) -> ListResult[TimeEntry]:
        entries = self.time_entry_repository.list(
            task_id=task_id, project_id=project_id, running=running,
            limit=limit, offset=offset
        )
        total = self.time_entry_repository.count(task_id=task_id, project_id=project_id, running=running)
        return ListResult(items=entries, total=total, limit=limit, offset=offset)


class DeleteTimeEntryUseCase(_TimeEntryUseCase):
    """Use case for deleting a time entry."""

    def execute(self, entry_id: int) -> None:
        if not self.time_entry_repository.delete(entry_id):
            self._require(None, "TimeEntry", entry_id)
        logger.info(f"Deleted time entry {entry_id}")


@dataclass
class DurationTotal:
    """Logged time in minutes, with the hour equivalent."""

    minutes: int

    @property
    def hours(self) -> float:
        return round(self.minutes / 60, 2)


@dataclass
class TimeSummary:
    """Totals, per-day breakdown and running timers."""

    total_duration: DurationTotal
    duration_by_date: List[Dict[str, Any]]
    running_timers: List[TimeEntry]


def _check_range(start_date: Optional[datetime], end_date: Optional[datetime]) -> None:
    if start_date and end_date and end_date < start_date:
        raise ValidationError("End date must be after start date", "end_date")


class GetTotalDurationUseCase(_TimeEntryUseCase):
    """Use case for the time logged on stopped entries, optionally within a range."""

    def execute(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> DurationTotal:
        _check_range(start_date, end_date)
        return DurationTotal(self.time_entry_repository.total_duration(start=start_date, end=end_date))


class GetTaskDurationUseCase(_TimeEntryUseCase):
    """Use case for the time logged on one task."""

    def execute(self, task_id: int) -> DurationTotal:
        task = self._get_task(task_id)
        return DurationTotal(self.time_entry_repository.total_duration(task_id=task.id))


class GetProjectDurationUseCase(_TimeEntryUseCase):
    """Use case for the time logged on one project."""

    def execute(self, project_id: int) -> DurationTotal:
        project = self._require(self.project_repository.get_by_id(project_id), "Project", project_id)
        return DurationTotal(self.time_entry_repository.total_duration(project_id=project.id))


class GetDurationByDateUseCase(_TimeEntryUseCase):
    """Use case for logged time per day. Both ends of the range are required."""

    def execute(self, start_date: Optional[datetime], end_date: Optional[datetime]) -> List[Dict[str, Any]]:
        if not start_date or not end_date:
            missing = "start_date" if not start_date else "end_date"
            raise ValidationError("Start date and end date are required", missing)
        _check_range(start_date, end_date)
        return self.time_entry_repository.duration_by_date(start_date, end_date)


class GetTimeSummaryUseCase(_TimeEntryUseCase):
    """
    Use case for the time tracking overview.

    Without a range the per-day breakdown covers every stopped entry.
    """

    def execute(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> TimeSummary:
        _check_range(start_date, end_date)

        total = self.time_entry_repository.total_duration(start=start_date, end=end_date)
        by_date = self.time_entry_repository.duration_by_date(start_date, end_date)
        running = self.time_entry_repository.list(running=True)
        logger.info(f"Time summary: {total} minutes, {len(running)} running timers")

        return TimeSummary(
            total_duration=DurationTotal(total),
            duration_by_date=by_date,
            running_timers=running
        )
