"""
Task repository implementation using SQLAlchemy.
"""

from datetime import datetime
from typing import Dict, Optional, List
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func, desc

from bizdesk.domain.models.task import Task, TaskStatus
from bizdesk.domain.repositories.task_repository import TaskRepository as TaskRepositoryInterface
from bizdesk.domain.models.base import EntityNotFoundError
from bizdesk.infrastructure.db.models import TaskModel
from bizdesk.infrastructure.mappers.task_mapper import TaskMapper


CLOSED_STATUSES = (TaskStatus.DONE.value, TaskStatus.COMPLETED.value, TaskStatus.CANCELLED.value)


class SQLAlchemyTaskRepository(TaskRepositoryInterface):
    """SQLAlchemy implementation of task repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = TaskMapper()

    def _query(self):
        return self.session.query(TaskModel).options(joinedload(TaskModel.project))

    def _filtered(self, query, project_id=None, status=None, priority=None):
        if project_id is not None:
            query = query.filter(TaskModel.project_id == project_id)
        if status is not None:
            query = query.filter(TaskModel.status == status)
        if priority is not None:
            query = query.filter(TaskModel.priority == priority)
        return query

    def save(self, task: Task) -> Task:
        """Save a task entity."""
        if task.is_new:
            model = self.mapper.domain_to_model(task)
            self.session.add(model)
        else:
            model = self.session.get(TaskModel, task.id)
            if not model:
                raise EntityNotFoundError("Task", task.id)
            self.mapper.update_model(model, task)

        self.session.flush()
        self.session.refresh(model)
        task.id = model.id
        return task

    def get_by_id(self, task_id: int) -> Optional[Task]:
        """Get task by ID."""
        model = self._query().filter(TaskModel.id == task_id).first()

        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list(
        self,
        project_id: Optional[int] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[Task]:
        """List tasks, newest first."""
        query = self._filtered(
            self._query(), project_id, status, priority
        ).order_by(desc(TaskModel.created_at), desc(TaskModel.id))

        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)

        return [self.mapper.model_to_domain(model) for model in query.all()]

    def count(
        self,
        project_id: Optional[int] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None
    ) -> int:
        query = self._filtered(self.session.query(func.count(TaskModel.id)), project_id, status, priority)
        return query.scalar()

    def list_open_due(self, due_before: datetime, due_from: Optional[datetime] = None) -> List[Task]:
        """List unfinished tasks due in a window, earliest first."""
        query = self._query().filter(
            TaskModel.due_date < due_before,
            TaskModel.status.notin_(CLOSED_STATUSES)
        )
        if due_from is not None:
            query = query.filter(TaskModel.due_date >= due_from)
        query = query.order_by(TaskModel.due_date, TaskModel.id)

        return [self.mapper.model_to_domain(model) for model in query.all()]

    def search(self, term: str, limit: Optional[int] = None) -> List[Task]:
        """Search titles and descriptions; undated tasks come last."""
        pattern = f"%{term}%"
        query = self._query().filter(
            TaskModel.title.ilike(pattern) | TaskModel.description.ilike(pattern)
        ).order_by(TaskModel.due_date.is_(None), TaskModel.due_date, TaskModel.id)

        if limit:
            query = query.limit(limit)

        return [self.mapper.model_to_domain(model) for model in query.all()]

    def count_by_status(self) -> Dict[str, int]:
        rows = self.session.query(TaskModel.status, func.count(TaskModel.id)).group_by(TaskModel.status).all()
        return {status: count for status, count in rows}

    def count_by_priority(self) -> Dict[str, int]:
        rows = self.session.query(TaskModel.priority, func.count(TaskModel.id)).group_by(TaskModel.priority).all()
        return {priority: count for priority, count in rows}

    def delete(self, task_id: int) -> bool:
        """Delete task by ID; its time entries go with it."""
        model = self.session.get(TaskModel, task_id)
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True
