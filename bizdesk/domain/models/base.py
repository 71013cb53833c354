"""
Base entity and domain exceptions.
This module contains the foundational classes for all domain entities.
"""

from datetime import datetime
from typing import Optional, Any, Dict, List
from abc import ABC
from dataclasses import dataclass, field


@dataclass
class BaseEntity(ABC):
    """
    Base class for all domain entities.
    Provides common attributes and behavior for all entities.
    """

    id: Optional[int] = None
    created_at: Optional[datetime] = field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = field(default_factory=datetime.utcnow)

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and are of the same type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        if self.id is None:
            return hash(id(self))
        return hash((self.__class__.__name__, self.id))

    def mark_as_updated(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.utcnow()

    @property
    def is_new(self) -> bool:
        """Check if entity is new (not persisted)."""
        return self.id is None

    def validate(self) -> None:
        """
        Validate the entity's state.
        Should be overridden by subclasses to implement specific validation rules.
        Raises ValidationError if the entity is in an invalid state.
        """
        pass


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """Exception raised when input or entity validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, str]]] = None
    ):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field
        self.errors = errors or []
        if field and not self.errors:
            self.errors = [{"field": field, "message": message}]


class BusinessRuleViolation(DomainException):
    """Exception raised when a business rule is violated."""

    def __init__(self, message: str):
        super().__init__(message, "BUSINESS_RULE_VIOLATION")


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateEntityError(DomainException):
    """Exception raised when trying to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: Any):
        message = f"{entity_type} with {field}='{value}' already exists"
        super().__init__(message, "DUPLICATE_ENTITY")
        self.entity_type = entity_type
        self.field = field
        self.value = value
