"""
Task management router.
Handles CRUD operations, due-date views, search and counts for tasks.
"""

from typing import Annotated, Dict, List, Optional
from fastapi import APIRouter, Depends, status, Query

from bizdesk.application.use_cases.task_use_cases import (
    CreateTaskUseCase,
    UpdateTaskUseCase,
    GetTaskUseCase,
    ListTasksUseCase,
    DeleteTaskUseCase,
    ListOverdueTasksUseCase,
    ListTasksDueSoonUseCase,
    SearchTasksUseCase,
    GetTaskStatusCountsUseCase,
    GetTaskPriorityCountsUseCase,
    DEFAULT_DUE_SOON_DAYS
)
from bizdesk.application.dto.base_dto import ListResponseDTO
from bizdesk.application.dto.task_dto import (
    CreateTaskRequestDTO,
    UpdateTaskRequestDTO,
    TaskResponseDTO
)
from bizdesk.config import settings
from bizdesk.domain.models.task import TaskStatus, TaskPriority
from bizdesk.infrastructure.repositories.project_repository import SQLAlchemyProjectRepository
from bizdesk.infrastructure.repositories.task_repository import SQLAlchemyTaskRepository
from bizdesk.infrastructure.web.dependencies import get_project_repository, get_task_repository


router = APIRouter()

TaskRepositoryDep = Annotated[SQLAlchemyTaskRepository, Depends(get_task_repository)]
ProjectRepositoryDep = Annotated[SQLAlchemyProjectRepository, Depends(get_project_repository)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TaskResponseDTO)
def create_task(
    request: CreateTaskRequestDTO,
    repository: TaskRepositoryDep,
    project_repository: ProjectRepositoryDep
):
    """
    Create a new task.

    - **title**: Task title (required)
    - **project_id**: Project ID
    - **description**: Task description
    - **status**: pending, in-progress, done, completed, cancelled (default: pending)
    - **priority**: low, medium, high, urgent (default: medium)
    - **due_date**: Due date for the task
    - **comments**: Free-form comments
    """
    use_case = CreateTaskUseCase(repository, project_repository)
    return TaskResponseDTO.from_domain(use_case.execute(request))


@router.get("", response_model=ListResponseDTO[TaskResponseDTO])
def list_tasks(
    repository: TaskRepositoryDep,
    project_id: Optional[int] = Query(None, description="Filter by project ID"),
    status: Optional[TaskStatus] = Query(None, description="Filter by task status"),
    priority: Optional[TaskPriority] = Query(None, description="Filter by priority"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    offset: int = Query(0, ge=0)
):
    """
    List tasks, newest first.
    """
    use_case = ListTasksUseCase(repository)
    result = use_case.execute(project_id, status, priority, limit, offset)
    return ListResponseDTO[TaskResponseDTO](
        items=[TaskResponseDTO.from_domain(task) for task in result.items],
        total=result.total,
        limit=result.limit,
        offset=result.offset
    )


@router.get("/overdue", response_model=List[TaskResponseDTO])
def list_overdue_tasks(repository: TaskRepositoryDep):
    """
    List open tasks whose due date has passed, earliest first.
    """
    use_case = ListOverdueTasksUseCase(repository)
    return [TaskResponseDTO.from_domain(task) for task in use_case.execute()]


@router.get("/due-soon", response_model=List[TaskResponseDTO])
def list_tasks_due_soon(
    repository: TaskRepositoryDep,
    days: int = Query(DEFAULT_DUE_SOON_DAYS, ge=1, description="Look-ahead window in days")
):
    """
    List open tasks due within the next few days, earliest first.
    """
    use_case = ListTasksDueSoonUseCase(repository)
    return [TaskResponseDTO.from_domain(task) for task in use_case.execute(days)]


@router.get("/search", response_model=List[TaskResponseDTO])
def search_tasks(
    repository: TaskRepositoryDep,
    q: Optional[str] = Query(None, description="Text to find in task titles or descriptions"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size)
):
    """
    Search tasks by title or description, soonest due first.
    """
    use_case = SearchTasksUseCase(repository)
    return [TaskResponseDTO.from_domain(task) for task in use_case.execute(q, limit)]


@router.get("/stats/status", response_model=Dict[str, int])
def get_task_status_counts(repository: TaskRepositoryDep):
    """
    Count tasks per status.
    """
    return GetTaskStatusCountsUseCase(repository).execute()


@router.get("/stats/priority", response_model=Dict[str, int])
def get_task_priority_counts(repository: TaskRepositoryDep):
    """
    Count tasks per priority.
    """
    return GetTaskPriorityCountsUseCase(repository).execute()


@router.get("/{task_id}", response_model=TaskResponseDTO)
def get_task(task_id: int, repository: TaskRepositoryDep):
    """
    Get task details by ID.
    """
    use_case = GetTaskUseCase(repository)
    return TaskResponseDTO.from_domain(use_case.execute(task_id))


@router.put("/{task_id}", response_model=TaskResponseDTO)
@router.patch("/{task_id}", response_model=TaskResponseDTO)
def update_task(
    task_id: int,
    request: UpdateTaskRequestDTO,
    repository: TaskRepositoryDep,
    project_repository: ProjectRepositoryDep
):
    """
    Update a task. Only the fields sent are changed.

    Completed tasks can only be reopened to in-progress and cancelled tasks
    only back to pending.
    """
    use_case = UpdateTaskUseCase(repository, project_repository)
    return TaskResponseDTO.from_domain(use_case.execute(task_id, request))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, repository: TaskRepositoryDep):
    """
    Delete a task and its time entries.

    - **task_id**: Task ID to delete
    """
    use_case = DeleteTaskUseCase(repository)
    use_case.execute(task_id)
