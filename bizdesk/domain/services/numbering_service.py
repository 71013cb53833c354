"""Numbering service for invoice numbers.
Handles sequential number generation, format validation and existence checks.
"""

from typing import Any, Iterable, Optional
import re

from bizdesk.domain.models.base import ValidationError


TRAILING_DIGITS = re.compile(r"[0-9]+\Z")
INVOICE_NUMBER_FORMAT = re.compile(r"[A-Z]{0,10}-?[0-9]{1,10}")


def _read(record: Any, name: str) -> Any:
    """Read a field from a dict or an entity."""
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


class NumberingService:
    """
    Domain service for invoice numbering.
    Works on any iterable of existing invoices, given as dicts or entities.
    """

    def next_invoice_number(
        self,
        existing: Iterable[Any],
        prefix: str = "INV",
        padding: int = 4
    ) -> str:
        """
        Generate the next invoice number.

        The numeric part is one more than the highest trailing digit run
        found among the existing numbers; numbers without trailing digits
        count as 0.
        """
        highest = max(
            (self._sequence_of(_read(invoice, "invoice_number")) for invoice in existing),
            default=0
        )
        return f"{prefix}-{str(highest + 1).zfill(padding)}"

    def invoice_number_exists(
        self,
        invoice_number: str,
        existing: Iterable[Any],
        exclude_id: Optional[Any] = None
    ) -> bool:
        """Check whether a number is already taken, ignoring ``exclude_id``."""
        for invoice in existing:
            if exclude_id is not None and _read(invoice, "id") == exclude_id:
                continue
            if _read(invoice, "invoice_number") == invoice_number:
                return True
        return False

    def validate_invoice_number_format(self, invoice_number: Optional[str]) -> bool:
        if not invoice_number:
            return False
        return INVOICE_NUMBER_FORMAT.fullmatch(invoice_number) is not None

    def ensure_valid_invoice_number(self, invoice_number: Optional[str]) -> None:
        """Raise ValidationError unless the number is well formed."""
        if not self.validate_invoice_number_format(invoice_number):
            raise ValidationError(
                f"Invalid invoice number format: '{invoice_number}'. "
                "Expected an uppercase prefix followed by digits, e.g. INV-0001",
                "invoice_number"
            )

    def _sequence_of(self, invoice_number: Optional[str]) -> int:
        if not invoice_number:
            return 0
        match = TRAILING_DIGITS.search(invoice_number)
        return int(match.group()) if match else 0
