"""
Project use cases for the application layer.
Implements business logic for project management operations.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from bizdesk.application.dto.project_dto import CreateProjectRequestDTO, UpdateProjectRequestDTO
from bizdesk.application.use_cases.base_use_case import BaseUseCase, ListResult
from bizdesk.config import settings
from bizdesk.domain.models.project import Project, ProjectStatus
from bizdesk.domain.repositories.client_repository import ClientRepository
from bizdesk.domain.repositories.project_repository import ProjectRepository

logger = logging.getLogger(__name__)


class CreateProjectUseCase(BaseUseCase):
    """Use case for creating a new project."""

    def __init__(self, project_repository: ProjectRepository, client_repository: ClientRepository):
        self.project_repository = project_repository
        self.client_repository = client_repository

    def execute(self, request: CreateProjectRequestDTO) -> Project:
        # Verify client exists
        self._ensure_reference(self.client_repository, "Client", request.client_id)

        project = Project(**request.to_domain_dict())
        project.validate()

        # Save project
        saved_project = self.project_repository.save(project)
        logger.info(f"Created project '{saved_project.name}' (id={saved_project.id})")

        return self.project_repository.get_by_id(saved_project.id)


class UpdateProjectUseCase(BaseUseCase):
    """Use case for updating a project."""

    def __init__(self, project_repository: ProjectRepository, client_repository: ClientRepository):
        self.project_repository = project_repository
        self.client_repository = client_repository

    def execute(self, project_id: int, request: UpdateProjectRequestDTO) -> Project:
        # Get project
        project = self._require(self.project_repository.get_by_id(project_id), "Project", project_id)
        changes = request.to_patch()

        if "client_id" in changes:
            self._ensure_reference(self.client_repository, "Client", changes["client_id"])

        project.apply_changes(changes)
        project.validate()

        # Save project
        self.project_repository.save(project)
        logger.info(f"Updated project {project.id}: {sorted(changes)}")

        return self.project_repository.get_by_id(project.id)


class GetProjectUseCase(BaseUseCase):
    """Use case for getting a project by ID."""

    def __init__(self, project_repository: ProjectRepository):
        self.project_repository = project_repository

    def execute(self, project_id: int) -> Project:
        return self._require(self.project_repository.get_by_id(project_id), "Project", project_id)


class ListProjectsUseCase(BaseUseCase):
    """Use case for listing projects."""

    def __init__(self, project_repository: ProjectRepository):
        self.project_repository = project_repository

    def execute(
        self,
        client_id: Optional[int] = None,
        status: Optional[str] = None,
        limit: int = settings.default_page_size,
        offset: int = 0
    ) -> ListResult[Project]:
        status = ProjectStatus(status).value if status else None
        projects = self.project_repository.list(client_id=client_id, status=status, limit=limit, offset=offset)
        total = self.project_repository.count(client_id=client_id, status=status)
        return ListResult(items=projects, total=total, limit=limit, offset=offset)


class DeleteProjectUseCase(BaseUseCase):
    """Use case for deleting a project."""

    def __init__(self, project_repository: ProjectRepository):
        self.project_repository = project_repository

    def execute(self, project_id: int) -> None:
        if not self.project_repository.delete(project_id):
            self._require(None, "Project", project_id)
        logger.info(f"Deleted project {project_id}")


class ListOverdueProjectsUseCase(BaseUseCase):
    """Use case for listing open projects past their end date."""

    def __init__(self, project_repository: ProjectRepository):
        self.project_repository = project_repository

    def execute(self, as_of: Optional[datetime] = None) -> List[Project]:
        return self.project_repository.list_overdue(as_of or datetime.utcnow())


class SearchProjectsUseCase(BaseUseCase):
    """Use case for searching projects by name or description."""

    def __init__(self, project_repository: ProjectRepository):
        self.project_repository = project_repository

    def execute(self, term: Optional[str], limit: Optional[int] = None) -> List[Project]:
        return self.project_repository.search(self._search_term(term), limit=limit)


class GetProjectStatusCountsUseCase(BaseUseCase):
    """Use case for counting projects per status; every status is reported."""

    def __init__(self, project_repository: ProjectRepository):
        self.project_repository = project_repository

    def execute(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in ProjectStatus}
        counts.update(self.project_repository.count_by_status())
        return counts
