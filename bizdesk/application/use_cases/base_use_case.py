"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, TypeVar

from bizdesk.domain.models.base import EntityNotFoundError, ValidationError


T = TypeVar('T')


@dataclass
class ListResult(Generic[T]):
    """One page of a list query."""

    items: List[T]
    total: int
    limit: int
    offset: int


class BaseUseCase(ABC):
    """
    Base class for all use cases.
    Use cases raise domain exceptions; the web layer maps them to responses.
    """

    @abstractmethod
    def execute(self, *args, **kwargs) -> Any:
        """Run the use case."""
        pass

    @staticmethod
    def _require(entity: Optional[T], entity_type: str, entity_id: Any) -> T:
        """Return the entity or raise EntityNotFoundError."""
        if entity is None:
            raise EntityNotFoundError(entity_type, entity_id)
        return entity

    @staticmethod
    def _ensure_reference(repository: Any, entity_type: str, entity_id: Optional[int]) -> None:
        """Check that an optional reference points at a stored entity."""
        if entity_id is not None and repository.get_by_id(entity_id) is None:
            raise EntityNotFoundError(entity_type, entity_id)

    @staticmethod
    def _search_term(term: Optional[str]) -> str:
        """Return the stripped search term; blank terms are rejected."""
        if not term or not term.strip():
            raise ValidationError("Search term is required", "q")
        return term.strip()
