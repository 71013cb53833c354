"""
Project domain model.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any
from enum import Enum

from bizdesk.domain.models.base import BaseEntity, ValidationError


class ProjectStatus(str, Enum):
    """Project status."""
    ACTIVE = "active"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"
    CANCELLED = "cancelled"


@dataclass(eq=False)
class Project(BaseEntity):
    """
    Project entity.
    Belongs to a client when ``client_id`` is set.
    """

    client_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    # Populated from joins
    client_name: Optional[str] = None

    def __post_init__(self):
        self.status = ProjectStatus(self.status)

    def validate(self) -> None:
        """Validate project state."""
        if not self.name or not self.name.strip():
            raise ValidationError("Project name is required", "name")

        if len(self.name) > 255:
            raise ValidationError("Project name must be less than 255 characters", "name")

        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError("End date must be after or equal to start date", "end_date")

    @property
    def is_active(self) -> bool:
        return self.status == ProjectStatus.ACTIVE

    def apply_changes(self, changes: Dict[str, Any]) -> None:
        for name, value in changes.items():
            setattr(self, name, value)
        self.status = ProjectStatus(self.status)
        self.mark_as_updated()
