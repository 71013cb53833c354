"""
Task domain model.
Tasks are associated with projects and carry a status and a priority.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any
from enum import Enum

from bizdesk.domain.models.base import BaseEntity, ValidationError


class TaskStatus(str, Enum):
    """Task status."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    DONE = "done"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskPriority(str, Enum):
    """Task priority levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


@dataclass(eq=False)
class Task(BaseEntity):
    """
    Task entity.
    """

    project_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[datetime] = None
    comments: Optional[str] = None

    # Populated from joins
    project_name: Optional[str] = None

    def __post_init__(self):
        self.status = TaskStatus(self.status)
        self.priority = TaskPriority(self.priority)

    def validate(self) -> None:
        """Validate task state."""
        if not self.title or not self.title.strip():
            raise ValidationError("Task title is required", "title")

        if len(self.title) > 255:
            raise ValidationError("Task title must be less than 255 characters", "title")

    @property
    def is_completed(self) -> bool:
        return self.status in (TaskStatus.DONE, TaskStatus.COMPLETED)

    @property
    def is_cancelled(self) -> bool:
        return self.status == TaskStatus.CANCELLED

    @property
    def is_overdue(self) -> bool:
        """Check if task is overdue."""
        if not self.due_date or self.is_completed or self.is_cancelled:
            return False
        return self.due_date < datetime.utcnow()

    @property
    def is_high_priority(self) -> bool:
        return self.priority in (TaskPriority.HIGH, TaskPriority.URGENT)

    def can_transition_to(self, new_status: TaskStatus) -> bool:
        """
        Finished tasks can only be reopened into progress and cancelled
        tasks only back to pending.
        """
        new_status = TaskStatus(new_status)
        if self.is_completed:
            return new_status == TaskStatus.IN_PROGRESS
        if self.is_cancelled:
            return new_status == TaskStatus.PENDING
        return True

    def change_status(self, new_status: TaskStatus) -> None:
        new_status = TaskStatus(new_status)
        if new_status == self.status:
            return
        if not self.can_transition_to(new_status):
            raise ValidationError(
                f"Cannot transition from {self.status.value} to {new_status.value}",
                "status"
            )
        self.status = new_status
        self.mark_as_updated()

    def apply_changes(self, changes: Dict[str, Any]) -> None:
        changes = dict(changes)
        new_status = changes.pop("status", None)

        for name, value in changes.items():
            setattr(self, name, value)
        self.priority = TaskPriority(self.priority)

        if new_status is not None:
            self.change_status(new_status)
        self.mark_as_updated()
