"""Invoice repository interface.
Defines the contract for invoice and invoice item persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Dict, Any, Iterable

from bizdesk.domain.models.invoice import Invoice, InvoiceItem


class InvoiceRepository(ABC):
    """
    Repository interface for the Invoice aggregate.
    Items are persisted through the same repository as their invoice.
    """

    @abstractmethod
    def save(self, invoice: Invoice) -> Invoice:
        """
        Save an invoice entity.
        Raises DuplicateEntityError when the invoice number is already taken.
        """
        pass

    @abstractmethod
    def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        """
        Find an invoice by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def get_by_number(self, invoice_number: str) -> Optional[Invoice]:
        """
        Find an invoice by its number.
        Used for uniqueness checks.
        """
        pass

    @abstractmethod
    def list(
        self,
        client_id: Optional[int] = None,
        project_id: Optional[int] = None,
        status: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[Invoice]:
        """
        List invoices, newest issue date first.
        """
        pass

    @abstractmethod
    def count(
        self,
        client_id: Optional[int] = None,
        project_id: Optional[int] = None,
        status: Optional[str] = None
    ) -> int:
        """
        Count invoices matching the same filters as ``list``.
        """
        pass

    @abstractmethod
    def list_overdue(self, as_of: datetime) -> List[Invoice]:
        """
        List unpaid, uncancelled invoices due before ``as_of``,
        earliest due date first.
        """
        pass

    @abstractmethod
    def search(self, term: str, limit: Optional[int] = None) -> List[Invoice]:
        """
        Case-insensitive match on invoice number or client name, newest first.
        """
        pass

    @abstractmethod
    def count_by_status(self) -> Dict[str, int]:
        """
        Number of invoices per stored status.
        Statuses without invoices may be missing.
        """
        pass

    @abstractmethod
    def sum_total(
        self,
        statuses: Iterable[str],
        client_id: Optional[int] = None,
        paid_from: Optional[datetime] = None,
        paid_to: Optional[datetime] = None
    ) -> float:
        """
        Sum of invoice totals in the given statuses.
        ``paid_from`` and ``paid_to`` bound the paid date inclusively.
        """
        pass

    @abstractmethod
    def list_invoice_numbers(self) -> List[Dict[str, Any]]:
        """
        Return ``{"id", "invoice_number"}`` for every stored invoice.
        """
        pass

    @abstractmethod
    def delete(self, invoice_id: int) -> bool:
        """
        Delete an invoice and its items.
        Returns False if it did not exist.
        """
        pass

    @abstractmethod
    def save_item(self, item: InvoiceItem) -> InvoiceItem:
        """
        Save an invoice item.
        """
        pass

    @abstractmethod
    def get_item(self, invoice_id: int, item_id: int) -> Optional[InvoiceItem]:
        """
        Find an item belonging to the given invoice.
        """
        pass

    @abstractmethod
    def list_items(self, invoice_id: int) -> List[InvoiceItem]:
        """
        List the items of an invoice in creation order.
        """
        pass

    @abstractmethod
    def delete_item(self, item_id: int) -> bool:
        """
        Delete an invoice item.
        """
        pass
