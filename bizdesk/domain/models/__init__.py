"""
Domain models for the business management system.
This module exports all domain entities and exceptions.
"""

# Base classes
from .base import (
    BaseEntity,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    DuplicateEntityError,
)

# Domain entities
from .client import Client
from .invoice import Invoice, InvoiceItem, InvoiceStatus, InvoiceItemType
from .project import Project, ProjectStatus
from .task import Task, TaskStatus, TaskPriority
from .time_entry import TimeEntry

__all__ = [
    "BaseEntity",
    "DomainException",
    "ValidationError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "Client",
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
    "InvoiceItemType",
    "Project",
    "ProjectStatus",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "TimeEntry",
]
