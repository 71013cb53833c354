"""Time entry repository interface.
Defines the contract for time tracking persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from bizdesk.domain.models.time_entry import TimeEntry


class TimeEntryRepository(ABC):
    """
    Repository interface for TimeEntry entities.
    """

    @abstractmethod
    def save(self, time_entry: TimeEntry) -> TimeEntry:
        """
        Save a time entry.
        """
        pass

    @abstractmethod
    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        """
        Find a time entry by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def get_running(self) -> Optional[TimeEntry]:
        """
        Find the running timer, if any.
        """
        pass

    @abstractmethod
    def list(
        self,
        task_id: Optional[int] = None,
        project_id: Optional[int] = None,
        running: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[TimeEntry]:
        """
        List time entries, most recent start first.
        """
        pass

    @abstractmethod
    def count(
        self,
        task_id: Optional[int] = None,
        project_id: Optional[int] = None,
        running: Optional[bool] = None
    ) -> int:
        pass

    @abstractmethod
    def total_duration(
        self,
        task_id: Optional[int] = None,
        project_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> int:
        """
        Minutes logged on stopped entries.
        ``start`` and ``end`` bound the start time inclusively.
        """
        pass

    @abstractmethod
    def duration_by_date(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        """
        Minutes and entry counts of stopped entries per start date, latest
        date first. Rows are ``{"date", "total_duration", "entry_count"}``.
        ``start`` and ``end`` bound the start time inclusively.
        """
        pass

    @abstractmethod
    def delete(self, entry_id: int) -> bool:
        """
        Delete a time entry.
        """
        pass
