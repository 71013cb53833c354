"""
Invoice use cases for the application layer.
Implements business logic for invoicing, invoice numbering and invoice items.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from bizdesk.application.dto.invoice_dto import (
    CreateInvoiceRequestDTO, UpdateInvoiceRequestDTO,
    CreateInvoiceItemRequestDTO, UpdateInvoiceItemRequestDTO
)
from bizdesk.application.use_cases.base_use_case import BaseUseCase, ListResult
from bizdesk.config import settings
from bizdesk.domain.models.base import DuplicateEntityError, ValidationError
from bizdesk.domain.models.invoice import Invoice, InvoiceItem, InvoiceStatus
from bizdesk.domain.repositories.client_repository import ClientRepository
from bizdesk.domain.repositories.invoice_repository import InvoiceRepository
from bizdesk.domain.repositories.project_repository import ProjectRepository
from bizdesk.domain.repositories.task_repository import TaskRepository
from bizdesk.domain.services.billing_service import BillingService
from bizdesk.domain.services.numbering_service import NumberingService

logger = logging.getLogger(__name__)


class _InvoiceNumberMixin:
    """Shared invoice number checks."""

    invoice_repository: InvoiceRepository
    numbering_service: NumberingService

    def _ensure_number_available(self, invoice_number: str, exclude_id: Optional[int] = None) -> None:
        self.numbering_service.ensure_valid_invoice_number(invoice_number)

        existing = self.invoice_repository.list_invoice_numbers()
        if self.numbering_service.invoice_number_exists(invoice_number, existing, exclude_id=exclude_id):
            logger.warning(f"Rejected duplicate invoice number {invoice_number}")
            raise DuplicateEntityError("Invoice", "invoice_number", invoice_number)

    def _next_number(self) -> str:
        return self.numbering_service.next_invoice_number(
            self.invoice_repository.list_invoice_numbers(),
            prefix=settings.invoice_number_prefix,
            padding=settings.invoice_number_padding
        )


class CreateInvoiceUseCase(_InvoiceNumberMixin, BaseUseCase):
    """Use case for creating a new invoice."""

    def __init__(
        self,
        invoice_repository: InvoiceRepository,
        client_repository: ClientRepository,
        project_repository: ProjectRepository,
        numbering_service: Optional[NumberingService] = None
    ):
        self.invoice_repository = invoice_repository
        self.client_repository = client_repository
        self.project_repository = project_repository
        self.numbering_service = numbering_service or NumberingService()

    def execute(self, request: CreateInvoiceRequestDTO) -> Invoice:
        # Verify references
        self._ensure_reference(self.client_repository, "Client", request.client_id)
        self._ensure_reference(self.project_repository, "Project", request.project_id)

        data = request.to_domain_dict()

        # Use the caller's number or generate the next one
        if data.get("invoice_number"):
            self._ensure_number_available(data["invoice_number"])
        else:
            data["invoice_number"] = self._next_number()
            logger.info(f"Generated invoice number {data['invoice_number']}")

        invoice = Invoice(**data)
        invoice.stamp_status_dates()
        invoice.validate(check_date_order=request.has_issue_date)

        # Save invoice
        saved_invoice = self.invoice_repository.save(invoice)
        logger.info(f"Created invoice {saved_invoice.invoice_number} (id={saved_invoice.id})")

        return self.invoice_repository.get_by_id(saved_invoice.id)


class UpdateInvoiceUseCase(_InvoiceNumberMixin, BaseUseCase):
    """Use case for updating an invoice."""

    def __init__(
        self,
        invoice_repository: InvoiceRepository,
        client_repository: ClientRepository,
        project_repository: ProjectRepository,
        numbering_service: Optional[NumberingService] = None
    ):
        self.invoice_repository = invoice_repository
        self.client_repository = client_repository
        self.project_repository = project_repository
        self.numbering_service = numbering_service or NumberingService()

    def execute(self, invoice_id: int, request: UpdateInvoiceRequestDTO) -> Invoice:
        # Get invoice
        invoice = self._require(self.invoice_repository.get_by_id(invoice_id), "Invoice", invoice_id)
        changes = request.to_patch()

        if "client_id" in changes:
            self._ensure_reference(self.client_repository, "Client", changes["client_id"])
        if "project_id" in changes:
            self._ensure_reference(self.project_repository, "Project", changes["project_id"])

        new_number = changes.get("invoice_number")
        if new_number and new_number != invoice.invoice_number:
            self._ensure_number_available(new_number, exclude_id=invoice.id)

        invoice.apply_changes(changes)
        invoice.validate(check_date_order="issue_date" in changes and "due_date" in changes)

        # Save invoice
        self.invoice_repository.save(invoice)
        logger.info(f"Updated invoice {invoice.id}: {sorted(changes)}")

        return self.invoice_repository.get_by_id(invoice.id)


class GetInvoiceUseCase(BaseUseCase):
    """Use case for getting an invoice by ID."""

    def __init__(self, invoice_repository: InvoiceRepository):
        self.invoice_repository = invoice_repository

    def execute(self, invoice_id: int) -> Invoice:
        return self._require(self.invoice_repository.get_by_id(invoice_id), "Invoice", invoice_id)


class ListInvoicesUseCase(BaseUseCase):
    """Use case for listing invoices."""

    def __init__(self, invoice_repository: InvoiceRepository):
        self.invoice_repository = invoice_repository

    def execute(
        self,
        client_id: Optional[int] = None,
        project_id: Optional[int] = None,
        status: Optional[str] = None,
        limit: int = settings.default_page_size,
        offset: int = 0
    ) -> ListResult[Invoice]:
        status = InvoiceStatus(status).value if status else None
        invoices = self.invoice_repository.list(
            client_id=client_id, project_id=project_id, status=status,
            limit=limit, offset=offset
        )
        total = self.invoice_repository.count(client_id=client_id, project_id=project_id, status=status)
        return ListResult(items=invoices, total=total, limit=limit, offset=offset)


class DeleteInvoiceUseCase(BaseUseCase):
    """Use case for deleting an invoice together with its items."""

    def __init__(self, invoice_repository: InvoiceRepository):
        self.invoice_repository = invoice_repository

    def execute(self, invoice_id: int) -> None:
        if not self.invoice_repository.delete(invoice_id):
            self._require(None, "Invoice", invoice_id)
        logger.info(f"Deleted invoice {invoice_id}")


class GenerateInvoiceNumberUseCase(_InvoiceNumberMixin, BaseUseCase):
    """Use case for proposing the next invoice number."""

    def __init__(
        self,
        invoice_repository: InvoiceRepository,
        numbering_service: Optional[NumberingService] = None
    ):
        self.invoice_repository = invoice_repository
        self.numbering_service = numbering_service or NumberingService()

    def execute(self) -> str:
        invoice_number = self._next_number()
        logger.info(f"Next invoice number is {invoice_number}")
        return invoice_number


class ListOverdueInvoicesUseCase(BaseUseCase):
    """Use case for listing invoices past their due date."""

    def __init__(self, invoice_repository: InvoiceRepository):
        self.invoice_repository = invoice_repository

    def execute(self, as_of: Optional[datetime] = None) -> List[Invoice]:
        return self.invoice_repository.list_overdue(as_of or datetime.utcnow())


class SearchInvoicesUseCase(BaseUseCase):
    """Use case for searching invoices by number or client name."""

    def __init__(self, invoice_repository: InvoiceRepository):
        self.invoice_repository = invoice_repository

    def execute(self, term: Optional[str], limit: Optional[int] = None) -> List[Invoice]:
        return self.invoice_repository.search(self._search_term(term), limit=limit)


@dataclass
class InvoiceStats:
    """Invoice counts per status and revenue figures."""

    status_counts: Dict[str, int]
    total_revenue: float
    pending_amount: float

    @property
    def total_outstanding(self) -> float:
        return round(self.total_revenue + self.pending_amount, 2)


class GetInvoiceStatsUseCase(BaseUseCase):
    """
    Use case for invoice statistics.

    Revenue is the total of paid invoices, optionally limited to a paid-date
    range and a client. The pending amount covers sent and overdue invoices.
    """

    def __init__(self, invoice_repository: InvoiceRepository):
        self.invoice_repository = invoice_repository

    def execute(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        client_id: Optional[int] = None
    ) -> InvoiceStats:
        if start_date and end_date and end_date < start_date:
            raise ValidationError("End date must be after start date", "end_date")

        counts = {status.value: 0 for status in InvoiceStatus}
        counts.update(self.invoice_repository.count_by_status())

        revenue = self.invoice_repository.sum_total(
            [InvoiceStatus.PAID.value], client_id=client_id, paid_from=start_date, paid_to=end_date
        )
        pending = self.invoice_repository.sum_total(
            [InvoiceStatus.SENT.value, InvoiceStatus.OVERDUE.value]
        )
        return InvoiceStats(status_counts=counts, total_revenue=round(revenue, 2), pending_amount=round(pending, 2))


class _InvoiceItemUseCase(BaseUseCase):
    """Shared wiring for invoice item use cases."""

    def __init__(
        self,
        invoice_repository: InvoiceRepository,
        project_repository: Optional[ProjectRepository] = None,
        task_repository: Optional[TaskRepository] = None,
        billing_service: Optional[BillingService] = None
    ):
        self.invoice_repository = invoice_repository
        self.project_repository = project_repository
        self.task_repository = task_repository
        self.billing_service = billing_service or BillingService()

    def _get_invoice(self, invoice_id: int) -> Invoice:
        return self._require(self.invoice_repository.get_by_id(invoice_id), "Invoice", invoice_id)

    def _get_item(self, invoice_id: int, item_id: int) -> InvoiceItem:
        return self._require(
            self.invoice_repository.get_item(invoice_id, item_id), "InvoiceItem", item_id
        )

    def _ensure_item_references(self, project_id: Optional[int], task_id: Optional[int]) -> None:
        if self.project_repository is not None:
            self._ensure_reference(self.project_repository, "Project", project_id)
        if self.task_repository is not None:
            self._ensure_reference(self.task_repository, "Task", task_id)

    def _recalculate_invoice(self, invoice: Invoice) -> None:
        """Invoice amount follows the sum of its items."""
        items = self.invoice_repository.list_items(invoice.id)
        self.billing_service.apply_items_to_invoice(invoice, items)
        self.invoice_repository.save(invoice)
        logger.info(f"Recalculated invoice {invoice.id}: amount={invoice.amount} total={invoice.total}")


class AddInvoiceItemUseCase(_InvoiceItemUseCase):
    """Use case for adding an item to an invoice."""

    def execute(self, invoice_id: int, request: CreateInvoiceItemRequestDTO) -> InvoiceItem:
        invoice = self._get_invoice(invoice_id)
        self._ensure_item_references(request.project_id, request.task_id)

        item = InvoiceItem(invoice_id=invoice.id, **request.to_domain_dict())
        item.validate()
        self.billing_service.price_item(item)

        saved_item = self.invoice_repository.save_item(item)
        logger.info(f"Added item {saved_item.id} to invoice {invoice.id}")

        self._recalculate_invoice(invoice)
        return self.invoice_repository.get_item(invoice.id, saved_item.id)


class UpdateInvoiceItemUseCase(_InvoiceItemUseCase):
    """Use case for updating an invoice item."""

    def execute(self, invoice_id: int, item_id: int, request: UpdateInvoiceItemRequestDTO) -> InvoiceItem:
        invoice = self._get_invoice(invoice_id)
        item = self._get_item(invoice_id, item_id)
        changes = request.to_patch()
        self._ensure_item_references(changes.get("project_id"), changes.get("task_id"))

        item.apply_changes(changes)
        item.validate()
        self.billing_service.price_item(item)

        self.invoice_repository.save_item(item)
        logger.info(f"Updated item {item.id} on invoice {invoice.id}: {sorted(changes)}")

        self._recalculate_invoice(invoice)
        return self.invoice_repository.get_item(invoice.id, item.id)


class DeleteInvoiceItemUseCase(_InvoiceItemUseCase):
    """Use case for removing an item from an invoice."""

    def execute(self, invoice_id: int, item_id: int) -> None:
        invoice = self._get_invoice(invoice_id)
        item = self._get_item(invoice_id, item_id)

        self.invoice_repository.delete_item(item.id)
        logger.info(f"Deleted item {item.id} from invoice {invoice.id}")

        self._recalculate_invoice(invoice)


class ListInvoiceItemsUseCase(_InvoiceItemUseCase):
    """Use case for listing the items of an invoice."""

    def execute(self, invoice_id: int) -> List[InvoiceItem]:
        invoice = self._get_invoice(invoice_id)
        return self.invoice_repository.list_items(invoice.id)
