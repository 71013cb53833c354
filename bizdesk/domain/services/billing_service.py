"""
Billing service for invoice item pricing and invoice totals.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from bizdesk.domain.models.invoice import Invoice, InvoiceItem


class BillingService:
    """
    Domain service for billing calculations.
    """

    def calculate_item_amount(self, item: InvoiceItem) -> float:
        """
        Hourly items bill hours worked at the hourly rate; everything else,
        including zero hours or a zero rate, bills quantity at unit price.
        """
        if item.is_hourly:
            return self._round_currency(item.hours_worked * item.rate_per_hour)
        return self._round_currency((item.quantity or 0) * (item.unit_price or 0))

    def price_item(self, item: InvoiceItem) -> InvoiceItem:
        item.amount = self.calculate_item_amount(item)
        return item

    def calculate_invoice_amount(self, items: Iterable[InvoiceItem]) -> float:
        """Sum of item amounts."""
        return self._round_currency(sum(item.amount or 0 for item in items))

    def apply_items_to_invoice(self, invoice: Invoice, items: Iterable[InvoiceItem]) -> Invoice:
        """
        Set the invoice amount from its items and recompute the total.
        """
        items = list(items)
        invoice.amount = self.calculate_invoice_amount(items)
        invoice.total = self._round_currency(invoice.amount + (invoice.tax or 0))
        invoice.item_count = len(items)
        invoice.mark_as_updated()
        return invoice

    def _round_currency(self, amount: float) -> float:
        """
        Round amount to 2 decimal places for currency.
        """
        return float(Decimal(str(amount)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))
