"""
Task use cases for the application layer.
Implements business logic for task management operations.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from bizdesk.application.dto.task_dto import CreateTaskRequestDTO, UpdateTaskRequestDTO
from bizdesk.application.use_cases.base_use_case import BaseUseCase, ListResult
from bizdesk.config import settings
from bizdesk.domain.models.base import ValidationError
from bizdesk.domain.models.task import Task, TaskStatus, TaskPriority
from bizdesk.domain.repositories.project_repository import ProjectRepository
from bizdesk.domain.repositories.task_repository import TaskRepository

logger = logging.getLogger(__name__)

DEFAULT_DUE_SOON_DAYS = 7


class CreateTaskUseCase(BaseUseCase):
    """Use case for creating a new task."""

    def __init__(self, task_repository: TaskRepository, project_repository: ProjectRepository):
        self.task_repository = task_repository
        self.project_repository = project_repository

    def execute(self, request: CreateTaskRequestDTO) -> Task:
        # Verify project exists
        self._ensure_reference(self.project_repository, "Project", request.project_id)

        task = Task(**request.to_domain_dict())
        task.validate()

        # Save task
        saved_task = self.task_repository.save(task)
        logger.info(f"Created task '{saved_task.title}' (id={saved_task.id})")

        return self.task_repository.get_by_id(saved_task.id)


class UpdateTaskUseCase(BaseUseCase):
    """Use case for updating a task."""

    def __init__(self, task_repository: TaskRepository, project_repository: ProjectRepository):
        self.task_repository = task_repository
        self.project_repository = project_repository

    def execute(self, task_id: int, request: UpdateTaskRequestDTO) -> Task:
        # Get task
        task = self._require(self.task_repository.get_by_id(task_id), "Task", task_id)
        changes = request.to_patch()

        if "project_id" in changes:
            self._ensure_reference(self.project_repository, "Project", changes["project_id"])

        task.apply_changes(changes)
        task.validate()

        # Save task
        self.task_repository.save(task)
        logger.info(f"Updated task {task.id}: {sorted(changes)}")

        return self.task_repository.get_by_id(task.id)


class GetTaskUseCase(BaseUseCase):
    """Use case for getting a task by ID."""

    def __init__(self, task_repository: TaskRepository):
        self.task_repository = task_repository

    def execute(self, task_id: int) -> Task:
        return self._require(self.task_repository.get_by_id(task_id), "Task", task_id)


class ListTasksUseCase(BaseUseCase):
    """Use case for listing tasks."""

    def __init__(self, task_repository: TaskRepository):
        self.task_repository = task_repository

    def execute(
        self,
        project_id: Optional[int] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        limit: int = settings.default_page_size,
        offset: int = 0
    ) -> ListResult[Task]:
        status = TaskStatus(status).value if status else None
        priority = TaskPriority(priority).value if priority else None
        tasks = self.task_repository.list(
            project_id=project_id, status=status, priority=priority,
            limit=limit, offset=offset
        )
        total = self.task_repository.count(project_id=project_id, status=status, priority=priority)
        return ListResult(items=tasks, total=total, limit=limit, offset=offset)


class DeleteTaskUseCase(BaseUseCase):
    """Use case for deleting a task."""

    def __init__(self, task_repository: TaskRepository):
        self.task_repository = task_repository

    def execute(self, task_id: int) -> None:
        if not self.task_repository.delete(task_id):
            self._require(None, "Task", task_id)
        logger.info(f"Deleted task {task_id}")


class ListOverdueTasksUseCase(BaseUseCase):
    """Use case for listing unfinished tasks past their due date."""

    def __init__(self, task_repository: TaskRepository):
        self.task_repository = task_repository

    def execute(self, as_of: Optional[datetime] = None) -> List[Task]:
        return self.task_repository.list_open_due(due_before=as_of or datetime.utcnow())


class ListTasksDueSoonUseCase(BaseUseCase):
    """Use case for listing unfinished tasks due within the next few days."""

    def __init__(self, task_repository: TaskRepository):
        self.task_repository = task_repository

    def execute(self, days: int = DEFAULT_DUE_SOON_DAYS, as_of: Optional[datetime] = None) -> List[Task]:
        if days < 1:
            raise ValidationError("Days must be a positive number", "days")
        now = as_of or datetime.utcnow()
        return self.task_repository.list_open_due(due_before=now + timedelta(days=days), due_from=now)


class SearchTasksUseCase(BaseUseCase):
    """Use case for searching tasks by title or description."""

    def __init__(self, task_repository: TaskRepository):
        self.task_repository = task_repository

    def execute(self, term: Optional[str], limit: Optional[int] = None) -> List[Task]:
        return self.task_repository.search(self._search_term(term), limit=limit)


class GetTaskStatusCountsUseCase(BaseUseCase):
    """Use case for counting tasks per status; every status is reported."""

    def __init__(self, task_repository: TaskRepository):
        self.task_repository = task_repository

    def execute(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in TaskStatus}
        counts.update(self.task_repository.count_by_status())
        return counts


class GetTaskPriorityCountsUseCase(BaseUseCase):
    """Use case for counting tasks per priority; every priority is reported."""

    def __init__(self, task_repository: TaskRepository):
        self.task_repository = task_repository

    def execute(self) -> Dict[str, int]:
        counts = {priority.value: 0 for priority in TaskPriority}
        counts.update(self.task_repository.count_by_priority())
        return counts
