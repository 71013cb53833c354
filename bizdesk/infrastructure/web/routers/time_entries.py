"""
Time tracking router.
Handles time entries, the start/stop timer and logged time summaries.
"""

from datetime import datetime
from typing import Annotated, List, Optional
from fastapi import APIRouter, Depends, status, Query

from bizdesk.application.use_cases.time_entry_use_cases import (
    CreateTimeEntryUseCase,
    UpdateTimeEntryUseCase,
    StartTimerUseCase,
    StopTimerUseCase,
    GetTimeEntryUseCase,
    ListTimeEntriesUseCase,
    DeleteTimeEntryUseCase,
    GetTotalDurationUseCase,
    GetTaskDurationUseCase,
    GetProjectDurationUseCase,
    GetDurationByDateUseCase,
    GetTimeSummaryUseCase
)
from bizdesk.application.dto.base_dto import ListResponseDTO
from bizdesk.application.dto.time_entry_dto import (
    CreateTimeEntryRequestDTO,
    UpdateTimeEntryRequestDTO,
    StartTimerRequestDTO,
    StopTimerRequestDTO,
    TimeEntryResponseDTO,
    DurationResponseDTO,
    DailyDurationResponseDTO,
    TimeSummaryResponseDTO
)
from bizdesk.config import settings
from bizdesk.infrastructure.repositories.project_repository import SQLAlchemyProjectRepository
from bizdesk.infrastructure.repositories.task_repository import SQLAlchemyTaskRepository
from bizdesk.infrastructure.repositories.time_entry_repository import SQLAlchemyTimeEntryRepository
from bizdesk.infrastructure.web.dependencies import (
    get_project_repository,
    get_task_repository,
    get_time_entry_repository
)


router = APIRouter()

TimeEntryRepositoryDep = Annotated[SQLAlchemyTimeEntryRepository, Depends(get_time_entry_repository)]
TaskRepositoryDep = Annotated[SQLAlchemyTaskRepository, Depends(get_task_repository)]
ProjectRepositoryDep = Annotated[SQLAlchemyProjectRepository, Depends(get_project_repository)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TimeEntryResponseDTO)
def create_time_entry(
    request: CreateTimeEntryRequestDTO,
    repository: TimeEntryRepositoryDep,
    task_repository: TaskRepositoryDep,
    project_repository: ProjectRepositoryDep
):
    """
    Log a time entry.

    - **task_id**: Task worked on (required)
    - **project_id**: Project (defaults to the task's project)
    - **description**: What was done (max 1000 characters)
    - **start_time**: Start time (default: now)
    - **end_time**: End time; omit to create a running entry
    - **is_billable**: Whether the time is billable (default: false)
    """
    use_case = CreateTimeEntryUseCase(repository, task_repository, project_repository)
    return TimeEntryResponseDTO.from_domain(use_case.execute(request))


@router.get("", response_model=ListResponseDTO[TimeEntryResponseDTO])
def list_time_entries(
    repository: TimeEntryRepositoryDep,
    task_id: Optional[int] = Query(None, description="Filter by task ID"),
    project_id: Optional[int] = Query(None, description="Filter by project ID"),
    running: Optional[bool] = Query(None, description="Only running (true) or stopped (false) entries"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    offset: int = Query(0, ge=0)
):
    """
    List time entries, most recent first.
    """
    use_case = ListTimeEntriesUseCase(repository)
    result = use_case.execute(task_id, project_id, running, limit, offset)
    return ListResponseDTO[TimeEntryResponseDTO](
        items=[TimeEntryResponseDTO.from_domain(entry) for entry in result.items],
        total=result.total,
        limit=result.limit,
        offset=result.offset
    )


@router.get("/summary", response_model=TimeSummaryResponseDTO)
def get_time_summary(
    repository: TimeEntryRepositoryDep,
    start_date: Optional[datetime] = Query(None, description="Entries started on or after"),
    end_date: Optional[datetime] = Query(None, description="Entries started on or before")
):
    """
    Get total logged time, time per day and the running timers.
    """
    use_case = GetTimeSummaryUseCase(repository)
    return TimeSummaryResponseDTO.from_summary(use_case.execute(start_date, end_date))


@router.get("/duration/total", response_model=DurationResponseDTO)
def get_total_duration(
    repository: TimeEntryRepositoryDep,
    start_date: Optional[datetime] = Query(None, description="Entries started on or after"),
    end_date: Optional[datetime] = Query(None, description="Entries started on or before")
):
    """
    Get the time logged on stopped entries.
    """
    use_case = GetTotalDurationUseCase(repository)
    return DurationResponseDTO.from_total(use_case.execute(start_date, end_date))


@router.get("/duration/by-date", response_model=List[DailyDurationResponseDTO])
def get_duration_by_date(
    repository: TimeEntryRepositoryDep,
    start_date: Optional[datetime] = Query(None, description="Entries started on or after (required)"),
    end_date: Optional[datetime] = Query(None, description="Entries started on or before (required)")
):
    """
    Get the time logged per day, latest day first.
    """
    use_case = GetDurationByDateUseCase(repository)
    return [DailyDurationResponseDTO(**row) for row in use_case.execute(start_date, end_date)]


@router.get("/duration/task/{task_id}", response_model=DurationResponseDTO)
def get_task_duration(task_id: int, repository: TimeEntryRepositoryDep, task_repository: TaskRepositoryDep):
    """
    Get the time logged on a task.
    """
    use_case = GetTaskDurationUseCase(repository, task_repository)
    return DurationResponseDTO.from_total(use_case.execute(task_id))


@router.get("/duration/project/{project_id}", response_model=DurationResponseDTO)
def get_project_duration(
    project_id: int,
    repository: TimeEntryRepositoryDep,
    project_repository: ProjectRepositoryDep
):
    """
    Get the time logged on a project.
    """
    use_case = GetProjectDurationUseCase(repository, project_repository=project_repository)
    return DurationResponseDTO.from_total(use_case.execute(project_id))


@router.post("/start", status_code=status.HTTP_201_CREATED, response_model=TimeEntryResponseDTO)
def start_timer(
    request: StartTimerRequestDTO,
    repository: TimeEntryRepositoryDep,
    task_repository: TaskRepositoryDep,
    project_repository: ProjectRepositoryDep
):
    """
    Start a timer on a task. Only one timer can run at a time.
    """
    use_case = StartTimerUseCase(repository, task_repository, project_repository)
    return TimeEntryResponseDTO.from_domain(use_case.execute(request))


@router.post("/{entry_id}/stop", response_model=TimeEntryResponseDTO)
def stop_timer(
    entry_id: int,
    repository: TimeEntryRepositoryDep,
    request: Optional[StopTimerRequestDTO] = None
):
    """
    Stop a running timer and record its duration in minutes.
    """
    use_case = StopTimerUseCase(repository)
    return TimeEntryResponseDTO.from_domain(use_case.execute(entry_id, request))


@router.get("/{entry_id}", response_model=TimeEntryResponseDTO)
def get_time_entry(entry_id: int, repository: TimeEntryRepositoryDep):
    """
    Get time entry details by ID.
    """
    use_case = GetTimeEntryUseCase(repository)
    return TimeEntryResponseDTO.from_domain(use_case.execute(entry_id))


@router.put("/{entry_id}", response_model=TimeEntryResponseDTO)
@router.patch("/{entry_id}", response_model=TimeEntryResponseDTO)
def update_time_entry(
    entry_id: int,
    request: UpdateTimeEntryRequestDTO,
    repository: TimeEntryRepositoryDep,
    task_repository: TaskRepositoryDep,
    project_repository: ProjectRepositoryDep
):
    """
    Update a time entry. Only the fields sent are changed.
    A running entry can only be updated together with an **end_time**.
    """
    use_case = UpdateTimeEntryUseCase(repository, task_repository, project_repository)
    return TimeEntryResponseDTO.from_domain(use_case.execute(entry_id, request))


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_time_entry(entry_id: int, repository: TimeEntryRepositoryDep):
    """
    Delete a time entry.
    """
    use_case = DeleteTimeEntryUseCase(repository)
    use_case.execute(entry_id)
