"""
Invoice DTOs for the application layer.
Data Transfer Objects for invoice and invoice item operations.
"""

from typing import Dict, Optional
from datetime import datetime
from pydantic import Field, field_validator, model_validator

from bizdesk.domain.models.base import ValidationError
from bizdesk.domain.models.invoice import InvoiceItem, InvoiceStatus, InvoiceItemType
from .base_dto import ResponseDTO, CreateRequestDTO, UpdateRequestDTO, BaseDTO, blank_to_none


class CreateInvoiceRequestDTO(CreateRequestDTO):
    """DTO for creating an invoice."""

    client_id: int = Field(gt=0, description="Client to invoice")
    project_id: Optional[int] = Field(default=None, gt=0, description="Associated project")
    invoice_number: Optional[str] = Field(
        default=None, max_length=50, description="Invoice number (generated when omitted)"
    )
    amount: float = Field(default=0.0, ge=0, description="Amount before tax")
    tax: float = Field(default=0.0, ge=0, description="Tax amount")
    total: Optional[float] = Field(default=None, ge=0, description="Total (amount + tax when omitted)")
    status: InvoiceStatus = Field(default=InvoiceStatus.DRAFT, description="Invoice status")
    issue_date: Optional[datetime] = Field(default=None, description="Issue date (now when omitted)")
    due_date: Optional[datetime] = Field(default=None, description="Payment due date")
    sent_date: Optional[datetime] = Field(default=None, description="Date the invoice was sent")
    paid_date: Optional[datetime] = Field(default=None, description="Date the invoice was paid")
    notes: Optional[str] = Field(default=None, max_length=2000, description="Notes")

    @field_validator("project_id", "invoice_number", mode="before")
    @classmethod
    def blank_as_missing(cls, v):
        return blank_to_none(v)

    @field_validator("amount", "tax", mode="before")
    @classmethod
    def null_amount_as_zero(cls, v):
        return 0.0 if v is None else v

    @field_validator("status", mode="before")
    @classmethod
    def null_status_as_draft(cls, v):
        return InvoiceStatus.DRAFT if v is None else v

    @model_validator(mode="after")
    def derive_defaults_and_check_dates(self):
        if self.total is None:
            self.total = self.amount + self.tax
        if self.issue_date is None:
            self.issue_date = datetime.utcnow()
            # A defaulted issue date does not count as supplied
            self.model_fields_set.discard("issue_date")
        elif self.due_date and self.due_date < self.issue_date:
            raise ValidationError("Due date must be after issue date", "due_date")
        return self

    @property
    def has_issue_date(self) -> bool:
        """Whether the caller supplied an issue date."""
        return "issue_date" in self.model_fields_set


class UpdateInvoiceRequestDTO(UpdateRequestDTO):
    """DTO for updating an invoice. Every field is optional."""

    non_nullable = ("client_id", "invoice_number", "amount", "tax", "status", "issue_date")

    client_id: Optional[int] = Field(default=None, gt=0)
    project_id: Optional[int] = Field(default=None, gt=0)
    invoice_number: Optional[str] = Field(default=None, min_length=1, max_length=50)
    amount: Optional[float] = Field(default=None, ge=0)
    tax: Optional[float] = Field(default=None, ge=0)
    total: Optional[float] = Field(default=None, ge=0)
    status: Optional[InvoiceStatus] = None
    issue_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    sent_date: Optional[datetime] = None
    paid_date: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("project_id", mode="before")
    @classmethod
    def blank_as_null(cls, v):
        return blank_to_none(v)

    @model_validator(mode="after")
    def check_dates(self):
        if self.issue_date and self.due_date and self.due_date < self.issue_date:
            raise ValidationError("Due date must be after issue date", "due_date")
        return self


class CreateInvoiceItemRequestDTO(CreateRequestDTO):
    """
    DTO for adding an item to an invoice.
    Hourly items send hours_worked and rate_per_hour; fixed items send
    quantity and unit_price.
    """

    description: str = Field(min_length=1, max_length=500, description="Item description")
    quantity: float = Field(default=1.0, ge=0, description="Quantity")
    unit_price: float = Field(default=0.0, ge=0, description="Price per unit")
    hours_worked: Optional[float] = Field(default=None, ge=0, description="Hours worked")
    rate_per_hour: Optional[float] = Field(default=None, ge=0, description="Hourly rate")
    project_id: Optional[int] = Field(default=None, gt=0)
    task_id: Optional[int] = Field(default=None, gt=0)

    @field_validator("project_id", "task_id", mode="before")
    @classmethod
    def blank_as_missing(cls, v):
        return blank_to_none(v)

    @field_validator("quantity", mode="before")
    @classmethod
    def null_quantity_as_one(cls, v):
        return 1.0 if v is None else v

    @field_validator("unit_price", mode="before")
    @classmethod
    def null_price_as_zero(cls, v):
        return 0.0 if v is None else v


class UpdateInvoiceItemRequestDTO(UpdateRequestDTO):
    """DTO for updating an invoice item."""

    non_nullable = ("description", "quantity", "unit_price")

    description: Optional[str] = Field(default=None, min_length=1, max_length=500)
    quantity: Optional[float] = Field(default=None, ge=0)
    unit_price: Optional[float] = Field(default=None, ge=0)
    hours_worked: Optional[float] = Field(default=None, ge=0)
    rate_per_hour: Optional[float] = Field(default=None, ge=0)
    project_id: Optional[int] = Field(default=None, gt=0)
    task_id: Optional[int] = Field(default=None, gt=0)

    @field_validator("project_id", "task_id", mode="before")
    @classmethod
    def blank_as_null(cls, v):
        return blank_to_none(v)


class InvoiceItemResponseDTO(ResponseDTO):
    """DTO for invoice item in responses."""

    invoice_id: int
    project_id: Optional[int] = None
    task_id: Optional[int] = None
    description: str
    quantity: float
    unit_price: float
    hours_worked: Optional[float] = None
    rate_per_hour: Optional[float] = None
    amount: float
    type: InvoiceItemType = Field(description="hourly when hours and rate were given, fixed otherwise")
    project_name: Optional[str] = None
    task_name: Optional[str] = None

    @classmethod
    def from_domain(cls, item: InvoiceItem) -> "InvoiceItemResponseDTO":
        data = cls._domain_values(item)
        data["type"] = item.item_type
        return cls(**data)


class InvoiceResponseDTO(ResponseDTO):
    """DTO for invoice responses."""

    client_id: int
    project_id: Optional[int] = None
    invoice_number: str
    amount: float
    tax: float
    total: float
    status: InvoiceStatus
    issue_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    sent_date: Optional[datetime] = None
    paid_date: Optional[datetime] = None
    notes: Optional[str] = None

    # Derived
    client_name: Optional[str] = None
    project_name: Optional[str] = None
    item_count: int = 0
    is_overdue: bool = False


class NextInvoiceNumberResponseDTO(BaseDTO):
    """Next available invoice number."""

    invoice_number: str


class InvoiceStatsResponseDTO(BaseDTO):
    """Invoice counts per status and revenue figures."""

    status_counts: Dict[str, int] = Field(description="Invoices per status")
    total_revenue: float = Field(description="Total of paid invoices")
    pending_amount: float = Field(description="Total of sent and overdue invoices")
    total_outstanding: float = Field(description="Revenue plus pending amount")

    @classmethod
    def from_stats(cls, stats) -> "InvoiceStatsResponseDTO":
        return cls(
            status_counts=stats.status_counts,
            total_revenue=stats.total_revenue,
            pending_amount=stats.pending_amount,
            total_outstanding=stats.total_outstanding
        )
