"""
Invoice repository implementation using SQLAlchemy.
"""

from datetime import datetime
from typing import Optional, List, Dict, Any, Iterable
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func, desc

from bizdesk.domain.models.invoice import Invoice, InvoiceItem, InvoiceStatus
from bizdesk.domain.repositories.invoice_repository import InvoiceRepository as InvoiceRepositoryInterface
from bizdesk.domain.models.base import EntityNotFoundError, DuplicateEntityError
from bizdesk.infrastructure.db.models import ClientModel, InvoiceModel, InvoiceItemModel
from bizdesk.infrastructure.mappers.invoice_mapper import InvoiceMapper


class SQLAlchemyInvoiceRepository(InvoiceRepositoryInterface):
    """SQLAlchemy implementation of invoice repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = InvoiceMapper()

    def _query(self):
        return self.session.query(InvoiceModel).options(
            joinedload(InvoiceModel.client),
            joinedload(InvoiceModel.project)
        )

    def _filtered(self, query, client_id=None, project_id=None, status=None):
        if client_id is not None:
            query = query.filter(InvoiceModel.client_id == client_id)
        if project_id is not None:
            query = query.filter(InvoiceModel.project_id == project_id)
        if status is not None:
            query = query.filter(InvoiceModel.status == status)
        return query

    def save(self, invoice: Invoice) -> Invoice:
        """Save an invoice entity."""
        if invoice.is_new:
            # Create new invoice
            model = self.mapper.domain_to_model(invoice)
            self.session.add(model)
        else:
            # Update existing invoice
            model = self.session.get(InvoiceModel, invoice.id)
            if not model:
                raise EntityNotFoundError("Invoice", invoice.id)
            self.mapper.update_model(model, invoice)

        try:
            self.session.flush()
        except IntegrityError as exc:
            self.session.rollback()
            # The unique constraint settles concurrent creations with the same number
            if "invoice_number" in str(exc.orig):
                raise DuplicateEntityError("Invoice", "invoice_number", invoice.invoice_number) from exc
            raise

        self.session.refresh(model)
        invoice.id = model.id
        return invoice

    def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID."""
        model = self._query().filter(InvoiceModel.id == invoice_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_by_number(self, invoice_number: str) -> Optional[Invoice]:
        """Get invoice by number."""
        model = self._query().filter(InvoiceModel.invoice_number == invoice_number).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list(
        self,
        client_id: Optional[int] = None,
        project_id: Optional[int] = None,
        status: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[Invoice]:
        """List invoices with optional filters and pagination."""
        query = self._filtered(self._query(), client_id, project_id, status).order_by(
            desc(InvoiceModel.issue_date), desc(InvoiceModel.id)
        )

        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)

        return [self.mapper.model_to_domain(model) for model in query.all()]

    def count(
        self,
        client_id: Optional[int] = None,
        project_id: Optional[int] = None,
        status: Optional[str] = None
    ) -> int:
        query = self._filtered(self.session.query(func.count(InvoiceModel.id)), client_id, project_id, status)
        return query.scalar()

    def list_overdue(self, as_of: datetime) -> List[Invoice]:
        """List overdue invoices, earliest due date first."""
        closed = (InvoiceStatus.PAID.value, InvoiceStatus.CANCELLED.value)
        query = self._query().filter(
            InvoiceModel.due_date < as_of,
            InvoiceModel.status.notin_(closed)
        ).order_by(InvoiceModel.due_date, InvoiceModel.id)

        return [self.mapper.model_to_domain(model) for model in query.all()]

    def search(self, term: str, limit: Optional[int] = None) -> List[Invoice]:
        """Search invoice numbers and client names, newest first."""
        pattern = f"%{term}%"
        query = self._query().outerjoin(ClientModel, InvoiceModel.client_id == ClientModel.id).filter(
            InvoiceModel.invoice_number.ilike(pattern) | ClientModel.name.ilike(pattern)
        ).order_by(desc(InvoiceModel.created_at), desc(InvoiceModel.id))

        if limit:
            query = query.limit(limit)

        return [self.mapper.model_to_domain(model) for model in query.all()]

    def count_by_status(self) -> Dict[str, int]:
        rows = self.session.query(
            InvoiceModel.status, func.count(InvoiceModel.id)
        ).group_by(InvoiceModel.status).all()
        return {status: count for status, count in rows}

    def sum_total(
        self,
        statuses: Iterable[str],
        client_id: Optional[int] = None,
        paid_from: Optional[datetime] = None,
        paid_to: Optional[datetime] = None
    ) -> float:
        query = self.session.query(func.coalesce(func.sum(InvoiceModel.total), 0)).filter(
            InvoiceModel.status.in_(list(statuses))
        )
        if client_id is not None:
            query = query.filter(InvoiceModel.client_id == client_id)
        if paid_from is not None:
            query = query.filter(InvoiceModel.paid_date >= paid_from)
        if paid_to is not None:
            query = query.filter(InvoiceModel.paid_date <= paid_to)
        return float(query.scalar() or 0)

    def list_invoice_numbers(self) -> List[Dict[str, Any]]:
        rows = self.session.query(InvoiceModel.id, InvoiceModel.invoice_number).all()
        return [{"id": row.id, "invoice_number": row.invoice_number} for row in rows]

    def delete(self, invoice_id: int) -> bool:
        """Delete invoice by ID; items go with it."""
        model = self.session.get(InvoiceModel, invoice_id)
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True

    def save_item(self, item: InvoiceItem) -> InvoiceItem:
        """Save an invoice item."""
        if item.is_new:
            model = self.mapper.item_to_model(item)
            self.session.add(model)
        else:
            model = self.session.get(InvoiceItemModel, item.id)
            if not model:
                raise EntityNotFoundError("InvoiceItem", item.id)
            self.mapper.update_item_model(model, item)

        self.session.flush()
        self.session.refresh(model)
        self._expire_items_of(item.invoice_id)
        item.id = model.id
        return item

    def get_item(self, invoice_id: int, item_id: int) -> Optional[InvoiceItem]:
        model = self.session.query(InvoiceItemModel).options(
            joinedload(InvoiceItemModel.project),
            joinedload(InvoiceItemModel.task)
        ).filter(
            InvoiceItemModel.invoice_id == invoice_id,
            InvoiceItemModel.id == item_id
        ).first()

        if not model:
            return None
        return self.mapper.item_model_to_domain(model)

    def list_items(self, invoice_id: int) -> List[InvoiceItem]:
        models = self.session.query(InvoiceItemModel).options(
            joinedload(InvoiceItemModel.project),
            joinedload(InvoiceItemModel.task)
        ).filter(
            InvoiceItemModel.invoice_id == invoice_id
        ).order_by(InvoiceItemModel.id).all()

        return [self.mapper.item_model_to_domain(model) for model in models]

    def delete_item(self, item_id: int) -> bool:
        model = self.session.get(InvoiceItemModel, item_id)
        if not model:
            return False

        invoice_id = model.invoice_id
        self.session.delete(model)
        self.session.flush()
        self._expire_items_of(invoice_id)
        return True

    def _expire_items_of(self, invoice_id: int) -> None:
        """Drop a cached items collection so item counts are reloaded."""
        parent = self.session.get(InvoiceModel, invoice_id)
        if parent is not None:
            self.session.expire(parent, ["items"])
