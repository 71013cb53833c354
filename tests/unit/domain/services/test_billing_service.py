"""
Unit tests for BillingService.
"""

from bizdesk.domain.models.invoice import Invoice, InvoiceItem
from bizdesk.domain.services.billing_service import BillingService


class TestBillingService:
    """Test cases for BillingService."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = BillingService()

    def test_hourly_item_amount(self):
        """Hourly items bill hours at the rate."""
        item = InvoiceItem(description="Development", hours_worked=2.5, rate_per_hour=80)
        assert self.service.calculate_item_amount(item) == 200.0

    def test_fixed_item_amount(self):
        """Fixed items bill quantity at unit price."""
        item = InvoiceItem(description="Licenses", quantity=3, unit_price=19.99)
        assert self.service.calculate_item_amount(item) == 59.97

    def test_hours_without_rate_fall_back_to_quantity(self):
        """Hours alone do not price an item."""
        item = InvoiceItem(description="Support", quantity=2, unit_price=10, hours_worked=5)
        assert self.service.calculate_item_amount(item) == 20.0

    def test_zero_hours_fall_back_to_quantity(self):
        """Zero hours at a rate bill quantity at unit price instead."""
        item = InvoiceItem(description="Support", quantity=3, unit_price=15, hours_worked=0, rate_per_hour=80)
        assert self.service.calculate_item_amount(item) == 45.0

    def test_currency_rounding(self):
        """Amounts are rounded to cents."""
        item = InvoiceItem(description="Consulting", hours_worked=1.25, rate_per_hour=33.33)
        assert self.service.calculate_item_amount(item) == 41.66

    def test_price_item(self):
        """price_item stores the computed amount on the item."""
        item = InvoiceItem(description="Setup", quantity=1, unit_price=300)
        self.service.price_item(item)
        assert item.amount == 300.0

    def test_apply_items_to_invoice(self):
        """The invoice amount is the sum of its items plus unchanged tax."""
        invoice = Invoice(id=1, client_id=1, invoice_number="INV-0001", tax=50)
        items = [
            InvoiceItem(description="A", amount=100.10),
            InvoiceItem(description="B", amount=200.20),
        ]

        self.service.apply_items_to_invoice(invoice, items)

        assert invoice.amount == 300.3
        assert invoice.total == 350.3
        assert invoice.item_count == 2

    def test_apply_no_items(self):
        """An invoice without items has no amount."""
        invoice = Invoice(id=1, client_id=1, invoice_number="INV-0001", amount=80, tax=20)

        self.service.apply_items_to_invoice(invoice, [])

        assert invoice.amount == 0.0
        assert invoice.total == 20.0
        assert invoice.item_count == 0
