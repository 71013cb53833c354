"""
Project DTOs for the application layer.
Data Transfer Objects for project-related operations.
"""

from typing import Optional
from datetime import datetime
from pydantic import Field, field_validator, model_validator

from bizdesk.domain.models.base import ValidationError
from bizdesk.domain.models.project import ProjectStatus
from .base_dto import ResponseDTO, CreateRequestDTO, UpdateRequestDTO, blank_to_none


class CreateProjectRequestDTO(CreateRequestDTO):
    """DTO for creating a new project."""

    name: str = Field(min_length=1, max_length=255, description="Project name")
    client_id: Optional[int] = Field(default=None, gt=0, description="Client the project belongs to")
    description: Optional[str] = Field(default=None, max_length=2000, description="Project description")
    status: ProjectStatus = Field(default=ProjectStatus.ACTIVE, description="Project status")
    start_date: Optional[datetime] = Field(default=None, description="Project start date")
    end_date: Optional[datetime] = Field(default=None, description="Project end date")

    @field_validator("client_id", mode="before")
    @classmethod
    def blank_as_missing(cls, v):
        return blank_to_none(v)

    @field_validator("status", mode="before")
    @classmethod
    def null_status_as_active(cls, v):
        return ProjectStatus.ACTIVE if v is None else v

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError("End date must be after or equal to start date", "end_date")
        return self


class UpdateProjectRequestDTO(UpdateRequestDTO):
    """DTO for updating a project."""

    non_nullable = ("name", "status")

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    client_id: Optional[int] = Field(default=None, gt=0)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: Optional[ProjectStatus] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator("client_id", mode="before")
    @classmethod
    def blank_as_null(cls, v):
        return blank_to_none(v)

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError("End date must be after or equal to start date", "end_date")
        return self


class ProjectResponseDTO(ResponseDTO):
    """DTO for project responses."""

    client_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    status: ProjectStatus
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    client_name: Optional[str] = None
