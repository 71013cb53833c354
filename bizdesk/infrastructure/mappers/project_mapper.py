"""
Project mapper for converting between domain entities and database models.
"""

from typing import Any, Dict

from bizdesk.domain.models.project import Project, ProjectStatus
from bizdesk.infrastructure.db.models import ProjectModel


class ProjectMapper:
    """Maps between Project domain entity and ProjectModel database model."""

    def _columns(self, project: Project) -> Dict[str, Any]:
        return dict(
            client_id=project.client_id,
            name=project.name,
            description=project.description,
            status=ProjectStatus(project.status).value,
            start_date=project.start_date,
            end_date=project.end_date,
            updated_at=project.updated_at
        )

    def domain_to_model(self, project: Project) -> ProjectModel:
        """Convert Project domain entity to ProjectModel."""
        return ProjectModel(id=project.id, created_at=project.created_at, **self._columns(project))

    def update_model(self, model: ProjectModel, project: Project) -> ProjectModel:
        """Copy entity state onto an existing row."""
        for name, value in self._columns(project).items():
            setattr(model, name, value)
        return model

    def model_to_domain(self, model: ProjectModel) -> Project:
        """Convert ProjectModel to Project domain entity."""
        return Project(
            id=model.id,
            client_id=model.client_id,
            name=model.name,
            description=model.description,
            status=ProjectStatus(model.status) if model.status else ProjectStatus.ACTIVE,
            start_date=model.start_date,
            end_date=model.end_date,
            client_name=model.client.name if model.client else None,
            created_at=model.created_at,
            updated_at=model.updated_at
        )
