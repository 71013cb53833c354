"""Project repository interface.
Defines the contract for project data persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional

from bizdesk.domain.models.project import Project


class ProjectRepository(ABC):
    """
    Repository interface for Project entities.
    """

    @abstractmethod
    def save(self, project: Project) -> Project:
        """
        Save a project entity.
        Returns the saved project with its ID.
        """
        pass

    @abstractmethod
    def get_by_id(self, project_id: int) -> Optional[Project]:
        """
        Find a project by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def list(
        self,
        client_id: Optional[int] = None,
        status: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[Project]:
        pass

    @abstractmethod
    def count(self, client_id: Optional[int] = None, status: Optional[str] = None) -> int:
        pass

    @abstractmethod
    def list_overdue(self, as_of: datetime) -> List[Project]:
        """
        List projects still open past their end date, earliest end date first.
        """
        pass

    @abstractmethod
    def search(self, term: str, limit: Optional[int] = None) -> List[Project]:
        """
        Case-insensitive match on name or description, newest first.
        """
        pass

    @abstractmethod
    def count_by_status(self) -> Dict[str, int]:
        pass

    @abstractmethod
    def delete(self, project_id: int) -> bool:
        """
        Delete a project.
        Returns False if it did not exist.
        """
        pass
