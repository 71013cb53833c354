"""
Time entry repository implementation using SQLAlchemy.
"""

from datetime import date, datetime
from typing import Any, Dict, Optional, List
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func, desc

from bizdesk.domain.models.time_entry import TimeEntry
from bizdesk.domain.repositories.time_entry_repository import TimeEntryRepository as TimeEntryRepositoryInterface
from bizdesk.domain.models.base import EntityNotFoundError
from bizdesk.infrastructure.db.models import TimeEntryModel
from bizdesk.infrastructure.mappers.time_entry_mapper import TimeEntryMapper


class SQLAlchemyTimeEntryRepository(TimeEntryRepositoryInterface):
    """SQLAlchemy implementation of time entry repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = TimeEntryMapper()

    def _query(self):
        return self.session.query(TimeEntryModel).options(
            joinedload(TimeEntryModel.task),
            joinedload(TimeEntryModel.project)
        )

    def _filtered(self, query, task_id=None, project_id=None, running=None):
        if task_id is not None:
            query = query.filter(TimeEntryModel.task_id == task_id)
        if project_id is not None:
            query = query.filter(TimeEntryModel.project_id == project_id)
        if running is True:
            query = query.filter(TimeEntryModel.end_time.is_(None))
        elif running is False:
            query = query.filter(TimeEntryModel.end_time.isnot(None))
        return query

    def save(self, time_entry: TimeEntry) -> TimeEntry:
        """Save a time entry."""
        if time_entry.is_new:
            model = self.mapper.domain_to_model(time_entry)
            self.session.add(model)
        else:
            model = self.session.get(TimeEntryModel, time_entry.id)
            if not model:
                raise EntityNotFoundError("TimeEntry", time_entry.id)
            self.mapper.update_model(model, time_entry)

        self.session.flush()
        self.session.refresh(model)
        time_entry.id = model.id
        return time_entry

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        """Get time entry by ID."""
        model = self._query().filter(TimeEntryModel.id == entry_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_running(self) -> Optional[TimeEntry]:
        """Get the running timer."""
        model = self._query().filter(
            TimeEntryModel.end_time.is_(None)
        ).order_by(desc(TimeEntryModel.start_time)).first()

        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list(
        self,
        task_id: Optional[int] = None,
        project_id: Optional[int] = None,
        running: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[TimeEntry]:
        """List time entries, most recent first."""
        query = self._filtered(self._query(), task_id, project_id, running).order_by(
            desc(TimeEntryModel.start_time), desc(TimeEntryModel.id)
        )

        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)

        return [self.mapper.model_to_domain(model) for model in query.all()]

    def count(
        self,
        task_id: Optional[int] = None,
        project_id: Optional[int] = None,
        running: Optional[bool] = None
    ) -> int:
        query = self._filtered(self.session.query(func.count(TimeEntryModel.id)), task_id, project_id, running)
        return query.scalar()

    def total_duration(
        self,
        task_id: Optional[int] = None,
        project_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> int:
        """Sum the minutes of stopped entries."""
        query = self._filtered(
            self.session.query(func.coalesce(func.sum(TimeEntryModel.duration), 0)),
            task_id, project_id, running=False
        )
        if start is not None:
            query = query.filter(TimeEntryModel.start_time >= start)
        if end is not None:
            query = query.filter(TimeEntryModel.start_time <= end)
        return int(query.scalar() or 0)

    def duration_by_date(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        """Group stopped entries by the date they started on."""
        day = func.date(TimeEntryModel.start_time)
        query = self._filtered(
            self.session.query(
                day.label("day"),
                func.coalesce(func.sum(TimeEntryModel.duration), 0).label("total_duration"),
                func.count(TimeEntryModel.id).label("entry_count")
            ),
            running=False
        )
        if start is not None:
            query = query.filter(TimeEntryModel.start_time >= start)
        if end is not None:
            query = query.filter(TimeEntryModel.start_time <= end)
        rows = query.group_by(day).order_by(desc(day)).all()

        # SQLite returns DATE() as text
        return [
            {
                "date": row.day if isinstance(row.day, date) else date.fromisoformat(str(row.day)),
                "total_duration": int(row.total_duration),
                "entry_count": int(row.entry_count),
            }
            for row in rows
        ]

    def delete(self, entry_id: int) -> bool:
        """Delete time entry by ID."""
        model = self.session.get(TimeEntryModel, entry_id)
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True
