"""
Unit tests for NumberingService.
"""

import pytest

from bizdesk.domain.models.base import ValidationError
from bizdesk.domain.models.invoice import Invoice
from bizdesk.domain.services.numbering_service import NumberingService


class TestNumberingService:
    """Test cases for NumberingService."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = NumberingService()

    def test_first_invoice_number(self):
        """With no invoices the sequence starts at 1."""
        assert self.service.next_invoice_number([]) == "INV-0001"

    def test_next_after_highest(self):
        """The next number follows the highest existing one, not the latest."""
        existing = [{"invoice_number": "INV-0007"}, {"invoice_number": "INV-0003"}]
        assert self.service.next_invoice_number(existing) == "INV-0008"

    def test_numbers_without_digits_count_as_zero(self):
        """Non-numeric numbers do not advance the sequence."""
        existing = [{"invoice_number": "CUSTOM-NOTANUMBER"}]
        assert self.service.next_invoice_number(existing) == "INV-0001"

    def test_missing_numbers_ignored(self):
        """Records without a number are skipped."""
        existing = [{"invoice_number": None}, {}, {"invoice_number": "INV-0002"}]
        assert self.service.next_invoice_number(existing) == "INV-0003"

    def test_only_ascii_trailing_digits_count(self):
        """Non-ASCII digits and a trailing newline do not advance the sequence."""
        existing = [{"invoice_number": "INV-\u0669\u0669"}, {"invoice_number": "INV-0500\n"}]
        assert self.service.next_invoice_number(existing) == "INV-0001"

    def test_custom_prefix_and_padding(self):
        """Prefix and padding are configurable."""
        existing = [{"invoice_number": "FAC-41"}]
        assert self.service.next_invoice_number(existing, prefix="FAC", padding=6) == "FAC-000042"

    def test_sequence_beyond_padding(self):
        """Numbers wider than the padding are not truncated."""
        existing = [{"invoice_number": "INV-9999"}]
        assert self.service.next_invoice_number(existing) == "INV-10000"

    def test_accepts_entities(self):
        """Existing invoices can be domain entities."""
        existing = [Invoice(id=1, client_id=1, invoice_number="INV-0010")]
        assert self.service.next_invoice_number(existing) == "INV-0011"

    def test_invoice_number_exists(self):
        """A taken number is reported."""
        existing = [{"id": 1, "invoice_number": "INV-0001"}]

        assert self.service.invoice_number_exists("INV-0001", existing) is True
        assert self.service.invoice_number_exists("INV-0002", existing) is False

    def test_invoice_number_exists_excludes_own_id(self):
        """An invoice does not collide with itself."""
        existing = [{"id": 1, "invoice_number": "INV-0001"}]
        assert self.service.invoice_number_exists("INV-0001", existing, exclude_id=1) is False

    def test_invoice_number_exists_other_id(self):
        """Excluding another invoice still finds the collision."""
        existing = [{"id": 1, "invoice_number": "INV-0001"}]
        assert self.service.invoice_number_exists("INV-0001", existing, exclude_id=2) is True

    @pytest.mark.parametrize("number", ["INV-0001", "INV0001", "2024", "FACTURA-12"])
    def test_valid_formats(self, number):
        """Uppercase prefixes followed by digits are valid."""
        assert self.service.validate_invoice_number_format(number) is True

    @pytest.mark.parametrize("number", [
        "", None, "inv-0001", "INV-", "INV-00A1", "INV 0001",
        "INV-0001\n", "INV-\u0661\u0662", "INV-\uff11\uff12",
    ])
    def test_invalid_formats(self, number):
        """Anything else is rejected."""
        assert self.service.validate_invoice_number_format(number) is False

    def test_ensure_valid_invoice_number(self):
        """Malformed numbers raise a validation error on the number field."""
        with pytest.raises(ValidationError, match="Invalid invoice number format") as exc_info:
            self.service.ensure_valid_invoice_number("bad number")

        assert exc_info.value.field == "invoice_number"
