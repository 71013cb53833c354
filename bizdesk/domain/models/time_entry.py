"""
Time entry domain model.
A time entry is either a running timer (no end time) or a closed interval.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any

from bizdesk.domain.models.base import BaseEntity, ValidationError, BusinessRuleViolation


MAX_DESCRIPTION_LENGTH = 1000


@dataclass(eq=False)
class TimeEntry(BaseEntity):
    """
    Time entry entity.
    ``duration`` is expressed in whole minutes.
    """

    task_id: Optional[int] = None
    project_id: Optional[int] = None
    description: Optional[str] = None
    start_time: Optional[datetime] = field(default_factory=datetime.utcnow)
    end_time: Optional[datetime] = None
    duration: Optional[int] = None
    is_billable: bool = False

    # Populated from joins
    task_name: Optional[str] = None
    project_name: Optional[str] = None

    def __post_init__(self):
        if self.duration is None and self.end_time:
            self.duration = self.calculate_duration()

    def validate(self) -> None:
        """Validate time entry state."""
        if not self.task_id:
            raise ValidationError("Task is required", "task_id")

        if not self.start_time:
            raise ValidationError("Start time is required", "start_time")

        if self.end_time and self.end_time <= self.start_time:
            raise ValidationError("End time must be after start time", "end_time")

        if self.description and len(self.description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Description must be {MAX_DESCRIPTION_LENGTH} characters or less",
                "description"
            )

    @property
    def is_running(self) -> bool:
        return self.end_time is None

    def calculate_duration(self) -> Optional[int]:
        """Elapsed whole minutes between start and end, None while running."""
        if not self.start_time or not self.end_time:
            return None
        return int((self.end_time - self.start_time).total_seconds() // 60)

    def stop(self, end_time: Optional[datetime] = None) -> None:
        """Stop a running timer."""
        if not self.is_running:
            raise BusinessRuleViolation("Timer is not running")

        self.end_time = end_time or datetime.utcnow()
        if self.end_time <= self.start_time:
            raise ValidationError("End time must be after start time", "end_time")
        self.duration = self.calculate_duration()
        self.mark_as_updated()

    def apply_changes(self, changes: Dict[str, Any]) -> None:
        """
        Apply a partial update.
        A running timer can only be edited together with an end time and a
        stopped entry cannot be reopened.
        """
        if self.is_running and not changes.get("end_time"):
            raise BusinessRuleViolation(
                "Cannot update a running timer. Stop it first or provide an end time."
            )
        if not self.is_running and "end_time" in changes and changes["end_time"] is None:
            raise BusinessRuleViolation("Cannot reopen a stopped time entry. Start a new timer instead.")

        for name, value in changes.items():
            setattr(self, name, value)

        if ("start_time" in changes or "end_time" in changes) and "duration" not in changes:
            self.duration = self.calculate_duration()
        self.mark_as_updated()
