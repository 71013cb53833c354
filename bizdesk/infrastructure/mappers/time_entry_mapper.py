"""
Time entry mapper for converting between domain entities and database models.
"""

from typing import Any, Dict

from bizdesk.domain.models.time_entry import TimeEntry
from bizdesk.infrastructure.db.models import TimeEntryModel


class TimeEntryMapper:
    """Maps between TimeEntry domain entity and TimeEntryModel database model."""

    def _columns(self, entry: TimeEntry) -> Dict[str, Any]:
        return dict(
            task_id=entry.task_id,
            project_id=entry.project_id,
            description=entry.description,
            start_time=entry.start_time,
            end_time=entry.end_time,
            duration=entry.duration,
            is_billable=bool(entry.is_billable),
            updated_at=entry.updated_at
        )

    def domain_to_model(self, entry: TimeEntry) -> TimeEntryModel:
        """Convert TimeEntry domain entity to TimeEntryModel."""
        return TimeEntryModel(id=entry.id, created_at=entry.created_at, **self._columns(entry))

    def update_model(self, model: TimeEntryModel, entry: TimeEntry) -> TimeEntryModel:
        for name, value in self._columns(entry).items():
            setattr(model, name, value)
        return model

    def model_to_domain(self, model: TimeEntryModel) -> TimeEntry:
        """Convert TimeEntryModel to TimeEntry domain entity."""
        return TimeEntry(
            id=model.id,
            task_id=model.task_id,
            project_id=model.project_id,
            description=model.description,
            start_time=model.start_time,
            end_time=model.end_time,
            duration=model.duration,
            is_billable=bool(model.is_billable),
            task_name=model.task.title if model.task else None,
            project_name=model.project.name if model.project else None,
            created_at=model.created_at,
            updated_at=model.updated_at
        )
