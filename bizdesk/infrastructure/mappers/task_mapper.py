"""
Task mapper for converting between domain entities and database models.
"""

from typing import Any, Dict

from bizdesk.domain.models.task import Task, TaskStatus, TaskPriority
from bizdesk.infrastructure.db.models import TaskModel


class TaskMapper:
    """Maps between Task domain entity and TaskModel database model."""

    def _columns(self, task: Task) -> Dict[str, Any]:
        return dict(
            project_id=task.project_id,
            title=task.title,
            description=task.description,
            status=TaskStatus(task.status).value,
            priority=TaskPriority(task.priority).value,
            due_date=task.due_date,
            comments=task.comments,
            updated_at=task.updated_at
        )

    def domain_to_model(self, task: Task) -> TaskModel:
        """Convert Task domain entity to TaskModel."""
        return TaskModel(id=task.id, created_at=task.created_at, **self._columns(task))

    def update_model(self, model: TaskModel, task: Task) -> TaskModel:
        for name, value in self._columns(task).items():
            setattr(model, name, value)
        return model

    def model_to_domain(self, model: TaskModel) -> Task:
        """Convert TaskModel to Task domain entity."""
        return Task(
            id=model.id,
            project_id=model.project_id,
            title=model.title,
            description=model.description,
            status=TaskStatus(model.status) if model.status else TaskStatus.PENDING,
            priority=TaskPriority(model.priority) if model.priority else TaskPriority.MEDIUM,
            due_date=model.due_date,
            comments=model.comments,
            project_name=model.project.name if model.project else None,
            created_at=model.created_at,
            updated_at=model.updated_at
        )
