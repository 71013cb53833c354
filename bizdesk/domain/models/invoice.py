"""
Invoice domain model.
Represents invoices issued to clients and the line items billed on them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any, Set
from enum import Enum

from bizdesk.domain.models.base import BaseEntity, ValidationError


class InvoiceStatus(str, Enum):
    """Invoice status."""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class InvoiceItemType(str, Enum):
    """How an invoice item is priced."""
    HOURLY = "hourly"
    FIXED = "fixed"


# Allowed status changes; paid and cancelled are terminal.
STATUS_TRANSITIONS: Dict[InvoiceStatus, Set[InvoiceStatus]] = {
    InvoiceStatus.DRAFT: {InvoiceStatus.SENT, InvoiceStatus.CANCELLED},
    InvoiceStatus.SENT: {InvoiceStatus.PAID, InvoiceStatus.OVERDUE, InvoiceStatus.CANCELLED},
    InvoiceStatus.OVERDUE: {InvoiceStatus.PAID, InvoiceStatus.CANCELLED},
    InvoiceStatus.PAID: set(),
    InvoiceStatus.CANCELLED: set(),
}


@dataclass(eq=False)
class Invoice(BaseEntity):
    """
    Invoice entity.
    Totals are either supplied by the caller or derived as amount + tax.
    """

    client_id: Optional[int] = None
    project_id: Optional[int] = None
    invoice_number: Optional[str] = None

    # Amounts
    amount: float = 0.0
    tax: float = 0.0
    total: Optional[float] = None

    status: InvoiceStatus = InvoiceStatus.DRAFT

    # Dates
    issue_date: Optional[datetime] = field(default_factory=datetime.utcnow)
    due_date: Optional[datetime] = None
    sent_date: Optional[datetime] = None
    paid_date: Optional[datetime] = None

    notes: Optional[str] = None

    # Populated from joins
    client_name: Optional[str] = None
    project_name: Optional[str] = None
    item_count: int = 0

    def __post_init__(self):
        self.status = InvoiceStatus(self.status)
        if self.total is None:
            self.total = self.calculate_total()

    def validate(self, check_date_order: bool = True) -> None:
        """
        Validate invoice state.
        Pass ``check_date_order=False`` unless the caller supplied both dates.
        """
        if not self.client_id:
            raise ValidationError("Client is required", "client_id")

        if not self.invoice_number or not self.invoice_number.strip():
            raise ValidationError("Invoice number is required", "invoice_number")

        if self.amount < 0:
            raise ValidationError("Amount cannot be negative", "amount")

        if self.tax < 0:
            raise ValidationError("Tax cannot be negative", "tax")

        if self.total is not None and self.total < 0:
            raise ValidationError("Total cannot be negative", "total")

        if check_date_order and self.issue_date and self.due_date and self.due_date < self.issue_date:
            raise ValidationError("Due date must be after issue date", "due_date")

    def calculate_total(self) -> float:
        """Calculate total from amount and tax."""
        return (self.amount or 0.0) + (self.tax or 0.0)

    @property
    def is_draft(self) -> bool:
        return self.status == InvoiceStatus.DRAFT

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID

    @property
    def is_cancelled(self) -> bool:
        return self.status == InvoiceStatus.CANCELLED

    @property
    def is_overdue(self) -> bool:
        """Unpaid, uncancelled invoices are overdue once the due date has passed."""
        if self.is_paid or self.is_cancelled or not self.due_date:
            return False
        return self.due_date < datetime.utcnow()

    def can_transition_to(self, new_status: InvoiceStatus) -> bool:
        """Check if status transition is valid."""
        return InvoiceStatus(new_status) in STATUS_TRANSITIONS[self.status]

    def change_status(self, new_status: InvoiceStatus, changed_at: Optional[datetime] = None) -> None:
        """
        Move the invoice to a new status.

        Sending stamps ``sent_date`` and paying stamps ``paid_date`` unless
        those dates are already set.
        """
        new_status = InvoiceStatus(new_status)
        if new_status == self.status:
            return

        if not self.can_transition_to(new_status):
            raise ValidationError(
                f"Cannot transition from {self.status.value} to {new_status.value}",
                "status"
            )

        self.status = new_status
        self.stamp_status_dates(changed_at)
        self.mark_as_updated()

    def stamp_status_dates(self, changed_at: Optional[datetime] = None) -> None:
        """Fill in sent/paid dates implied by the current status."""
        changed_at = changed_at or datetime.utcnow()
        if self.status == InvoiceStatus.SENT and not self.sent_date:
            self.sent_date = changed_at
        if self.status == InvoiceStatus.PAID and not self.paid_date:
            self.paid_date = changed_at

    def apply_changes(self, changes: Dict[str, Any]) -> None:
        """
        Apply a partial update.
        Only keys present in ``changes`` are touched; the total is recomputed
        when amount or tax change without an explicit total.
        """
        changes = dict(changes)
        new_status = changes.pop("status", None)

        for name, value in changes.items():
            setattr(self, name, value)

        if new_status is not None:
            self.change_status(new_status)

        pricing_changed = "amount" in changes or "tax" in changes
        if self.total is None or (pricing_changed and "total" not in changes):
            self.total = self.calculate_total()

        self.mark_as_updated()


@dataclass(eq=False)
class InvoiceItem(BaseEntity):
    """
    A line on an invoice.
    Project and task references are informational only.
    """

    invoice_id: Optional[int] = None
    project_id: Optional[int] = None
    task_id: Optional[int] = None
    description: Optional[str] = None

    quantity: float = 1.0
    unit_price: float = 0.0
    hours_worked: Optional[float] = None
    rate_per_hour: Optional[float] = None
    amount: float = 0.0

    # Populated from joins
    project_name: Optional[str] = None
    task_name: Optional[str] = None

    @property
    def item_type(self) -> InvoiceItemType:
        """Items are hourly only when both hours and rate are non-zero."""
        if self.hours_worked and self.rate_per_hour:
            return InvoiceItemType.HOURLY
        return InvoiceItemType.FIXED

    @property
    def is_hourly(self) -> bool:
        return self.item_type == InvoiceItemType.HOURLY

    def validate(self) -> None:
        """Validate item state."""
        if not self.description or not self.description.strip():
            raise ValidationError("Description is required", "description")

        for name in ("quantity", "unit_price", "hours_worked", "rate_per_hour"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValidationError(f"{name} cannot be negative", name)

    def apply_changes(self, changes: Dict[str, Any]) -> None:
        for name, value in changes.items():
            setattr(self, name, value)
        self.mark_as_updated()
