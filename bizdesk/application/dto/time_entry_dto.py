"""
Time entry DTOs for the application layer.
Data Transfer Objects for time tracking operations.
"""

from typing import List, Optional
from datetime import date, datetime
from pydantic import Field, field_validator, model_validator

from bizdesk.domain.models.base import ValidationError
from bizdesk.domain.models.time_entry import MAX_DESCRIPTION_LENGTH
from .base_dto import BaseDTO, ResponseDTO, CreateRequestDTO, UpdateRequestDTO, RequestDTO, blank_to_none


def _minutes_between(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)


class CreateTimeEntryRequestDTO(CreateRequestDTO):
    """
    DTO for logging time.
    Omitting end_time creates a running entry.
    """

    task_id: int = Field(gt=0, description="Task being worked on")
    project_id: Optional[int] = Field(default=None, gt=0, description="Project ID")
    description: Optional[str] = Field(
        default=None, max_length=MAX_DESCRIPTION_LENGTH, description="What was done"
    )
    start_time: datetime = Field(default_factory=datetime.utcnow, description="Start time")
    end_time: Optional[datetime] = Field(default=None, description="End time")
    duration: Optional[int] = Field(default=None, ge=0, description="Duration in minutes")
    is_billable: bool = Field(default=False, description="Whether the time is billable")

    @field_validator("project_id", mode="before")
    @classmethod
    def blank_as_missing(cls, v):
        return blank_to_none(v)

    @field_validator("start_time", mode="before")
    @classmethod
    def null_start_as_now(cls, v):
        return datetime.utcnow() if v is None else v

    @field_validator("is_billable", mode="before")
    @classmethod
    def null_billable_as_false(cls, v):
        return False if v is None else v

    @model_validator(mode="after")
    def check_times(self):
        if self.end_time:
            if self.end_time <= self.start_time:
                raise ValidationError("End time must be after start time", "end_time")
            self.duration = _minutes_between(self.start_time, self.end_time)
        return self


class UpdateTimeEntryRequestDTO(UpdateRequestDTO):
    """DTO for updating a time entry."""

    non_nullable = ("task_id", "start_time", "end_time", "is_billable")

    task_id: Optional[int] = Field(default=None, gt=0)
    project_id: Optional[int] = Field(default=None, gt=0)
    description: Optional[str] = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    is_billable: Optional[bool] = None

    @model_validator(mode="after")
    def check_times(self):
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValidationError("End time must be after start time", "end_time")
        return self


class StartTimerRequestDTO(RequestDTO):
    """DTO for starting a timer."""

    task_id: int = Field(gt=0, description="Task to track")
    project_id: Optional[int] = Field(default=None, gt=0)
    description: Optional[str] = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    is_billable: bool = Field(default=False)

    @field_validator("project_id", mode="before")
    @classmethod
    def blank_as_missing(cls, v):
        return blank_to_none(v)

    @field_validator("is_billable", mode="before")
    @classmethod
    def null_billable_as_false(cls, v):
        return False if v is None else v


class StopTimerRequestDTO(RequestDTO):
    """DTO for stopping a timer."""

    end_time: Optional[datetime] = Field(default=None, description="Stop time (defaults to now)")


class TimeEntryResponseDTO(ResponseDTO):
    """DTO for time entry responses."""

    task_id: int
    project_id: Optional[int] = None
    description: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, description="Duration in minutes")
    is_billable: bool = False

    # Derived
    is_running: bool = False
    task_name: Optional[str] = None
    project_name: Optional[str] = None


class DurationResponseDTO(BaseDTO):
    """Logged time."""

    minutes: int = Field(description="Total minutes")
    hours: float = Field(description="Total hours, rounded to 2 decimals")

    @classmethod
    def from_total(cls, total) -> "DurationResponseDTO":
        return cls(minutes=total.minutes, hours=total.hours)


class DailyDurationResponseDTO(BaseDTO):
    """Logged time on one day."""

    date: date
    total_duration: int = Field(description="Minutes logged")
    entry_count: int = Field(description="Stopped entries started that day")


class TimeSummaryResponseDTO(BaseDTO):
    """Time tracking overview."""

    total_duration: DurationResponseDTO
    duration_by_date: List[DailyDurationResponseDTO]
    running_timers: List[TimeEntryResponseDTO]

    @classmethod
    def from_summary(cls, summary) -> "TimeSummaryResponseDTO":
        return cls(
            total_duration=DurationResponseDTO.from_total(summary.total_duration),
            duration_by_date=[DailyDurationResponseDTO(**row) for row in summary.duration_by_date],
            running_timers=[TimeEntryResponseDTO.from_domain(entry) for entry in summary.running_timers]
        )
