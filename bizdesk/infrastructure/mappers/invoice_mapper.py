"""
Invoice mapper for converting between domain entities and database models.
"""

from typing import Any, Dict

from bizdesk.domain.models.invoice import Invoice, InvoiceItem, InvoiceStatus
from bizdesk.infrastructure.db.models import InvoiceModel, InvoiceItemModel


class InvoiceMapper:
    """Maps between Invoice/InvoiceItem entities and their database models."""

    def _columns(self, invoice: Invoice) -> Dict[str, Any]:
        return dict(
            client_id=invoice.client_id,
            project_id=invoice.project_id,
            invoice_number=invoice.invoice_number,
            status=InvoiceStatus(invoice.status).value,
            amount=invoice.amount,
            tax=invoice.tax,
            total=invoice.total,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            sent_date=invoice.sent_date,
            paid_date=invoice.paid_date,
            notes=invoice.notes,
            updated_at=invoice.updated_at
        )

    def domain_to_model(self, invoice: Invoice) -> InvoiceModel:
        """Convert Invoice domain entity to InvoiceModel."""
        return InvoiceModel(id=invoice.id, created_at=invoice.created_at, **self._columns(invoice))

    def update_model(self, model: InvoiceModel, invoice: Invoice) -> InvoiceModel:
        """Copy entity state onto an existing row."""
        for name, value in self._columns(invoice).items():
            setattr(model, name, value)
        return model

    def model_to_domain(self, model: InvoiceModel) -> Invoice:
        """Convert InvoiceModel to Invoice domain entity."""
        return Invoice(
            id=model.id,
            client_id=model.client_id,
            project_id=model.project_id,
            invoice_number=model.invoice_number,
            amount=model.amount or 0.0,
            tax=model.tax or 0.0,
            total=model.total,
            status=InvoiceStatus(model.status) if model.status else InvoiceStatus.DRAFT,
            issue_date=model.issue_date,
            due_date=model.due_date,
            sent_date=model.sent_date,
            paid_date=model.paid_date,
            notes=model.notes,
            client_name=model.client.name if model.client else None,
            project_name=model.project.name if model.project else None,
            item_count=len(model.items),
            created_at=model.created_at,
            updated_at=model.updated_at
        )

    def _item_columns(self, item: InvoiceItem) -> Dict[str, Any]:
        return dict(
            invoice_id=item.invoice_id,
            project_id=item.project_id,
            task_id=item.task_id,
            description=item.description,
            quantity=item.quantity,
            unit_price=item.unit_price,
            hours_worked=item.hours_worked,
            rate_per_hour=item.rate_per_hour,
            amount=item.amount,
            updated_at=item.updated_at
        )

    def item_to_model(self, item: InvoiceItem) -> InvoiceItemModel:
        return InvoiceItemModel(id=item.id, created_at=item.created_at, **self._item_columns(item))

    def update_item_model(self, model: InvoiceItemModel, item: InvoiceItem) -> InvoiceItemModel:
        for name, value in self._item_columns(item).items():
            setattr(model, name, value)
        return model

    def item_model_to_domain(self, model: InvoiceItemModel) -> InvoiceItem:
        """Convert InvoiceItemModel to InvoiceItem domain entity."""
        return InvoiceItem(
            id=model.id,
            invoice_id=model.invoice_id,
            project_id=model.project_id,
            task_id=model.task_id,
            description=model.description,
            quantity=model.quantity if model.quantity is not None else 1.0,
            unit_price=model.unit_price or 0.0,
            hours_worked=model.hours_worked,
            rate_per_hour=model.rate_per_hour,
            amount=model.amount or 0.0,
            project_name=model.project.name if model.project else None,
            task_name=model.task.title if model.task else None,
            created_at=model.created_at,
            updated_at=model.updated_at
        )
