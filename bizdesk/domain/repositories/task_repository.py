"""Task repository interface.
Defines the contract for task data persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional

from bizdesk.domain.models.task import Task


class TaskRepository(ABC):
    """
    Repository interface for Task entities.
    """

    @abstractmethod
    def save(self, task: Task) -> Task:
        """
        Save a task entity.
        """
        pass

    @abstractmethod
    def get_by_id(self, task_id: int) -> Optional[Task]:
        """
        Find a task by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def list(
        self,
        project_id: Optional[int] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[Task]:
        pass

    @abstractmethod
    def count(
        self,
        project_id: Optional[int] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None
    ) -> int:
        pass

    @abstractmethod
    def list_open_due(self, due_before: datetime, due_from: Optional[datetime] = None) -> List[Task]:
        """
        List tasks that are not done, completed or cancelled and are due
        before ``due_before`` (and on or after ``due_from``), earliest first.
        """
        pass

    @abstractmethod
    def search(self, term: str, limit: Optional[int] = None) -> List[Task]:
        """
        Case-insensitive match on title or description, earliest due date first.
        """
        pass

    @abstractmethod
    def count_by_status(self) -> Dict[str, int]:
        pass

    @abstractmethod
    def count_by_priority(self) -> Dict[str, int]:
        pass

    @abstractmethod
    def delete(self, task_id: int) -> bool:
        """
        Delete a task.
        """
        pass
