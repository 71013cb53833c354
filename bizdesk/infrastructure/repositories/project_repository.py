"""
Project repository implementation using SQLAlchemy.
"""

from datetime import datetime
from typing import Dict, Optional, List
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func, desc

from bizdesk.domain.models.project import Project, ProjectStatus
from bizdesk.domain.repositories.project_repository import ProjectRepository as ProjectRepositoryInterface
from bizdesk.domain.models.base import EntityNotFoundError
from bizdesk.infrastructure.db.models import ProjectModel
from bizdesk.infrastructure.mappers.project_mapper import ProjectMapper


class SQLAlchemyProjectRepository(ProjectRepositoryInterface):
    """SQLAlchemy implementation of project repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ProjectMapper()

    def _query(self):
        return self.session.query(ProjectModel).options(joinedload(ProjectModel.client))

    def _filtered(self, query, client_id=None, status=None):
        if client_id is not None:
            query = query.filter(ProjectModel.client_id == client_id)
        if status is not None:
            query = query.filter(ProjectModel.status == status)
        return query

    def save(self, project: Project) -> Project:
        """Save a project entity."""
        if project.is_new:
            model = self.mapper.domain_to_model(project)
            self.session.add(model)
        else:
            model = self.session.get(ProjectModel, project.id)
            if not model:
                raise EntityNotFoundError("Project", project.id)
            self.mapper.update_model(model, project)

        self.session.flush()
        self.session.refresh(model)
        project.id = model.id
        return project

    def get_by_id(self, project_id: int) -> Optional[Project]:
        """Get project by ID."""
        model = self._query().filter(ProjectModel.id == project_id).first()

        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list(
        self,
        client_id: Optional[int] = None,
        status: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[Project]:
        """List projects, newest first."""
        query = self._filtered(
            self._query(), client_id, status
        ).order_by(desc(ProjectModel.created_at), desc(ProjectModel.id))

        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)

        return [self.mapper.model_to_domain(model) for model in query.all()]

    def count(self, client_id: Optional[int] = None, status: Optional[str] = None) -> int:
        return self._filtered(self.session.query(func.count(ProjectModel.id)), client_id, status).scalar()

    def list_overdue(self, as_of: datetime) -> List[Project]:
        """List open projects past their end date."""
        closed = (ProjectStatus.COMPLETED.value, ProjectStatus.CANCELLED.value)
        query = self._query().filter(
            ProjectModel.end_date < as_of,
            ProjectModel.status.notin_(closed)
        ).order_by(ProjectModel.end_date, ProjectModel.id)

        return [self.mapper.model_to_domain(model) for model in query.all()]

    def search(self, term: str, limit: Optional[int] = None) -> List[Project]:
        """Search names and descriptions, newest first."""
        pattern = f"%{term}%"
        query = self._query().filter(
            ProjectModel.name.ilike(pattern) | ProjectModel.description.ilike(pattern)
        ).order_by(desc(ProjectModel.created_at), desc(ProjectModel.id))

        if limit:
            query = query.limit(limit)

        return [self.mapper.model_to_domain(model) for model in query.all()]

    def count_by_status(self) -> Dict[str, int]:
        rows = self.session.query(
            ProjectModel.status, func.count(ProjectModel.id)
        ).group_by(ProjectModel.status).all()
        return {status: count for status, count in rows}

    def delete(self, project_id: int) -> bool:
        """Delete project by ID."""
        model = self.session.get(ProjectModel, project_id)
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True
