"""
Application layer use cases.
Business logic for the business management system.
"""

from .base_use_case import *
from .invoice_use_cases import *
from .project_use_cases import *
from .task_use_cases import *
from .time_entry_use_cases import *

__all__ = [
    # Base
    "BaseUseCase",
    "ListResult",

    # Invoices
    "CreateInvoiceUseCase",
    "UpdateInvoiceUseCase",
    "GetInvoiceUseCase",
    "ListInvoicesUseCase",
    "DeleteInvoiceUseCase",
    "GenerateInvoiceNumberUseCase",
    "AddInvoiceItemUseCase",
    "UpdateInvoiceItemUseCase",
    "DeleteInvoiceItemUseCase",
    "ListInvoiceItemsUseCase",

    # Projects
    "CreateProjectUseCase",
    "UpdateProjectUseCase",
    "GetProjectUseCase",
    "ListProjectsUseCase",
    "DeleteProjectUseCase",

    # Tasks
    "CreateTaskUseCase",
    "UpdateTaskUseCase",
    "GetTaskUseCase",
    "ListTasksUseCase",
    "DeleteTaskUseCase",

    # Time entries
    "CreateTimeEntryUseCase",
    "UpdateTimeEntryUseCase",
    "StartTimerUseCase",
    "StopTimerUseCase",
    "GetTimeEntryUseCase",
    "ListTimeEntriesUseCase",
    "DeleteTimeEntryUseCase",
]
