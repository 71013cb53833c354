"""
Task DTOs for the application layer.
Data Transfer Objects for task-related operations.
"""

from typing import Optional
from datetime import datetime
from pydantic import Field, field_validator

from bizdesk.domain.models.task import TaskStatus, TaskPriority
from .base_dto import ResponseDTO, CreateRequestDTO, UpdateRequestDTO, blank_to_none


class CreateTaskRequestDTO(CreateRequestDTO):
    """DTO for creating a new task."""

    title: str = Field(min_length=1, max_length=255, description="Task title")
    project_id: Optional[int] = Field(default=None, gt=0, description="Project ID")
    description: Optional[str] = Field(default=None, max_length=5000, description="Task description")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Task status")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Task priority")
    due_date: Optional[datetime] = Field(default=None, description="Task due date")
    comments: Optional[str] = Field(default=None, max_length=5000, description="Free-form comments")

    @field_validator("project_id", mode="before")
    @classmethod
    def blank_as_missing(cls, v):
        return blank_to_none(v)

    @field_validator("status", mode="before")
    @classmethod
    def null_status_as_pending(cls, v):
        return TaskStatus.PENDING if v is None else v

    @field_validator("priority", mode="before")
    @classmethod
    def null_priority_as_medium(cls, v):
        return TaskPriority.MEDIUM if v is None else v


class UpdateTaskRequestDTO(UpdateRequestDTO):
    """DTO for updating a task."""

    non_nullable = ("title", "status", "priority")

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    project_id: Optional[int] = Field(default=None, gt=0)
    description: Optional[str] = Field(default=None, max_length=5000)
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    comments: Optional[str] = Field(default=None, max_length=5000)

    @field_validator("project_id", mode="before")
    @classmethod
    def blank_as_null(cls, v):
        return blank_to_none(v)


class TaskResponseDTO(ResponseDTO):
    """DTO for task responses."""

    project_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[datetime] = None
    comments: Optional[str] = None

    # Derived
    project_name: Optional[str] = None
    is_overdue: bool = False
    is_high_priority: bool = False
