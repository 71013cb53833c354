"""
Project management router.
Handles CRUD operations, search and status counts for project resources.
"""

from typing import Annotated, Dict, List, Optional
from fastapi import APIRouter, Depends, status, Query

from bizdesk.application.use_cases.project_use_cases import (
    CreateProjectUseCase,
    UpdateProjectUseCase,
    GetProjectUseCase,
    ListProjectsUseCase,
    DeleteProjectUseCase,
    ListOverdueProjectsUseCase,
    SearchProjectsUseCase,
    GetProjectStatusCountsUseCase
)
from bizdesk.application.dto.base_dto import ListResponseDTO
from bizdesk.application.dto.project_dto import (
    CreateProjectRequestDTO,
    UpdateProjectRequestDTO,
    ProjectResponseDTO
)
from bizdesk.config import settings
from bizdesk.domain.models.project import ProjectStatus
from bizdesk.infrastructure.repositories.client_repository import SQLAlchemyClientRepository
from bizdesk.infrastructure.repositories.project_repository import SQLAlchemyProjectRepository
from bizdesk.infrastructure.web.dependencies import get_client_repository, get_project_repository


router = APIRouter()

ProjectRepositoryDep = Annotated[SQLAlchemyProjectRepository, Depends(get_project_repository)]
ClientRepositoryDep = Annotated[SQLAlchemyClientRepository, Depends(get_client_repository)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ProjectResponseDTO)
def create_project(
    request: CreateProjectRequestDTO,
    repository: ProjectRepositoryDep,
    client_repository: ClientRepositoryDep
):
    """
    Create a new project.

    - **name**: Project name (required)
    - **client_id**: Client the project belongs to
    - **description**: Project description
    - **status**: active, completed, on-hold, cancelled (default: active)
    - **start_date**, **end_date**: Project dates; end must not precede start
    """
    use_case = CreateProjectUseCase(repository, client_repository)
    return ProjectResponseDTO.from_domain(use_case.execute(request))


@router.get("", response_model=ListResponseDTO[ProjectResponseDTO])
def list_projects(
    repository: ProjectRepositoryDep,
    client_id: Optional[int] = Query(None, description="Filter by client ID"),
    status: Optional[ProjectStatus] = Query(None, description="Filter by project status"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    offset: int = Query(0, ge=0)
):
    """
    List projects, newest first.
    """
    use_case = ListProjectsUseCase(repository)
    result = use_case.execute(client_id, status, limit, offset)
    return ListResponseDTO[ProjectResponseDTO](
        items=[ProjectResponseDTO.from_domain(project) for project in result.items],
        total=result.total,
        limit=result.limit,
        offset=result.offset
    )


@router.get("/overdue", response_model=List[ProjectResponseDTO])
def list_overdue_projects(repository: ProjectRepositoryDep):
    """
    List open projects whose end date has passed, earliest first.
    """
    use_case = ListOverdueProjectsUseCase(repository)
    return [ProjectResponseDTO.from_domain(project) for project in use_case.execute()]


@router.get("/search", response_model=List[ProjectResponseDTO])
def search_projects(
    repository: ProjectRepositoryDep,
    q: Optional[str] = Query(None, description="Text to find in project names or descriptions"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size)
):
    """
    Search projects by name or description, newest first.
    """
    use_case = SearchProjectsUseCase(repository)
    return [ProjectResponseDTO.from_domain(project) for project in use_case.execute(q, limit)]


@router.get("/stats", response_model=Dict[str, int])
def get_project_stats(repository: ProjectRepositoryDep):
    """
    Count projects per status.
    """
    use_case = GetProjectStatusCountsUseCase(repository)
    return use_case.execute()


@router.get("/{project_id}", response_model=ProjectResponseDTO)
def get_project(project_id: int, repository: ProjectRepositoryDep):
    """
    Get project details by ID.
    """
    use_case = GetProjectUseCase(repository)
    return ProjectResponseDTO.from_domain(use_case.execute(project_id))


@router.put("/{project_id}", response_model=ProjectResponseDTO)
@router.patch("/{project_id}", response_model=ProjectResponseDTO)
def update_project(
    project_id: int,
    request: UpdateProjectRequestDTO,
    repository: ProjectRepositoryDep,
    client_repository: ClientRepositoryDep
):
    """
    Update a project. Only the fields sent are changed.
    """
    use_case = UpdateProjectUseCase(repository, client_repository)
    return ProjectResponseDTO.from_domain(use_case.execute(project_id, request))


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: int, repository: ProjectRepositoryDep):
    """
    Delete a project.
    """
    use_case = DeleteProjectUseCase(repository)
    use_case.execute(project_id)
