"""
Application layer DTOs.
Data Transfer Objects for API requests and responses.
"""

from .base_dto import *
from .invoice_dto import *
from .project_dto import *
from .task_dto import *
from .time_entry_dto import *

__all__ = [
    # Base DTOs
    "FieldNormalizer",
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "CreateRequestDTO",
    "UpdateRequestDTO",
    "ListResponseDTO",
    "HealthCheckResponseDTO",
    "ErrorResponseDTO",
    "validation_error_from_pydantic",

    # Invoice DTOs
    "CreateInvoiceRequestDTO",
    "UpdateInvoiceRequestDTO",
    "InvoiceResponseDTO",
    "CreateInvoiceItemRequestDTO",
    "UpdateInvoiceItemRequestDTO",
    "InvoiceItemResponseDTO",
    "NextInvoiceNumberResponseDTO",

    # Project DTOs
    "CreateProjectRequestDTO",
    "UpdateProjectRequestDTO",
    "ProjectResponseDTO",

    # Task DTOs
    "CreateTaskRequestDTO",
    "UpdateTaskRequestDTO",
    "TaskResponseDTO",

    # Time entry DTOs
    "CreateTimeEntryRequestDTO",
    "UpdateTimeEntryRequestDTO",
    "StartTimerRequestDTO",
    "StopTimerRequestDTO",
    "TimeEntryResponseDTO",
]
