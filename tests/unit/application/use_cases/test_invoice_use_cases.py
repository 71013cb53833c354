"""
Unit tests for invoice use cases.
Repositories run against an in-memory SQLite database.
"""

import pytest
from datetime import datetime, timedelta

from bizdesk.application.dto.invoice_dto import (
    CreateInvoiceRequestDTO,
    UpdateInvoiceRequestDTO,
    CreateInvoiceItemRequestDTO,
    UpdateInvoiceItemRequestDTO
)
from bizdesk.application.use_cases.invoice_use_cases import (
    CreateInvoiceUseCase,
    UpdateInvoiceUseCase,
    ListInvoicesUseCase,
    DeleteInvoiceUseCase,
    GenerateInvoiceNumberUseCase,
    AddInvoiceItemUseCase,
    UpdateInvoiceItemUseCase,
    DeleteInvoiceItemUseCase,
    GetInvoiceUseCase,
    ListOverdueInvoicesUseCase,
    SearchInvoicesUseCase,
    GetInvoiceStatsUseCase
)
from bizdesk.domain.models.base import ValidationError, EntityNotFoundError, DuplicateEntityError
from bizdesk.domain.models.invoice import Invoice
from bizdesk.infrastructure.repositories.client_repository import SQLAlchemyClientRepository
from bizdesk.infrastructure.repositories.invoice_repository import SQLAlchemyInvoiceRepository
from bizdesk.infrastructure.repositories.project_repository import SQLAlchemyProjectRepository
from bizdesk.infrastructure.repositories.task_repository import SQLAlchemyTaskRepository


class TestInvoiceUseCases:
    """Test cases for invoice creation, update and numbering."""

    @pytest.fixture(autouse=True)
    def repositories(self, db_session, client_id):
        self.client_id = client_id
        self.invoice_repository = SQLAlchemyInvoiceRepository(db_session)
        self.client_repository = SQLAlchemyClientRepository(db_session)
        self.project_repository = SQLAlchemyProjectRepository(db_session)

    def _create(self, **data):
        use_case = CreateInvoiceUseCase(
            self.invoice_repository, self.client_repository, self.project_repository
        )
        return use_case.execute(CreateInvoiceRequestDTO.build({"client_id": self.client_id, **data}))

    def _update(self, invoice_id, **data):
        use_case = UpdateInvoiceUseCase(
            self.invoice_repository, self.client_repository, self.project_repository
        )
        return use_case.execute(invoice_id, UpdateInvoiceRequestDTO.build(data))

    def test_create_generates_sequential_numbers(self):
        """Invoices without a number get the next one in sequence."""
        first = self._create()
        second = self._create()

        assert first.invoice_number == "INV-0001"
        assert second.invoice_number == "INV-0002"

    def test_create_returns_joined_fields(self):
        """The stored invoice is returned with its client name."""
        invoice = self._create(amount=100, tax=21)

        assert invoice.id is not None
        assert invoice.total == 121.0
        assert invoice.client_name == "Acme Corp"
        assert invoice.item_count == 0

    def test_create_with_custom_number(self):
        """A well-formed caller number is kept and continues the sequence."""
        self._create(invoice_number="INV-0041")

        use_case = GenerateInvoiceNumberUseCase(self.invoice_repository)
        assert use_case.execute() == "INV-0042"

    def test_create_with_duplicate_number(self):
        """Taken numbers are rejected."""
        self._create(invoice_number="INV-0001")

        with pytest.raises(DuplicateEntityError, match="INV-0001"):
            self._create(invoice_number="INV-0001")

    def test_create_with_malformed_number(self):
        """Numbers must have an uppercase prefix and digits."""
        with pytest.raises(ValidationError, match="Invalid invoice number format"):
            self._create(invoice_number="first invoice")

    def test_create_for_unknown_client(self):
        """The client must exist."""
        with pytest.raises(EntityNotFoundError, match="Client with id 999 not found"):
            self._create(client_id=999)

    def test_create_sent_invoice_stamps_sent_date(self):
        """Invoices created as sent record the sent date."""
        invoice = self._create(status="sent")
        assert invoice.sent_date is not None

    def test_repository_rejects_duplicate_number(self):
        """The unique index also guards against duplicates."""
        self.invoice_repository.save(Invoice(client_id=self.client_id, invoice_number="INV-0005"))

        with pytest.raises(DuplicateEntityError):
            self.invoice_repository.save(Invoice(client_id=self.client_id, invoice_number="INV-0005"))

    def test_update_keeps_absent_fields(self):
        """Only supplied fields change."""
        invoice = self._create(amount=100, tax=21, notes="January")

        updated = self._update(invoice.id, amount=200)

        assert updated.amount == 200.0
        assert updated.total == 221.0
        assert updated.notes == "January"

    def test_update_own_number_is_not_a_duplicate(self):
        """Sending the current number back is allowed."""
        invoice = self._create()
        updated = self._update(invoice.id, invoiceNumber=invoice.invoice_number, notes="Same")
        assert updated.invoice_number == invoice.invoice_number

    def test_update_to_taken_number(self):
        """Renumbering onto another invoice's number is rejected."""
        self._create()
        second = self._create()

        with pytest.raises(DuplicateEntityError):
            self._update(second.id, invoice_number="INV-0001")

    def test_update_status_transition(self):
        """Status updates follow the transition rules."""
        invoice = self._create()

        sent = self._update(invoice.id, status="sent")
        assert sent.sent_date is not None

        with pytest.raises(ValidationError, match="Cannot transition"):
            self._update(invoice.id, status="draft")

    def test_update_missing_invoice(self):
        """Unknown invoices are reported."""
        with pytest.raises(EntityNotFoundError):
            self._update(404, notes="Nothing")

    def test_list_filters_by_status(self):
        """Listing filters by status and reports the total."""
        self._create()
        self._create(status="sent")

        result = ListInvoicesUseCase(self.invoice_repository).execute(status="sent")

        assert result.total == 1
        assert [invoice.status for invoice in result.items] == ["sent"]

    def test_delete(self):
        """Deleted invoices are gone."""
        invoice = self._create()
        DeleteInvoiceUseCase(self.invoice_repository).execute(invoice.id)

        with pytest.raises(EntityNotFoundError):
            GetInvoiceUseCase(self.invoice_repository).execute(invoice.id)

    def test_create_with_past_due_date(self):
        """Without an issue date any due date is accepted."""
        invoice = self._create(due_date="2020-01-01T00:00:00")
        assert invoice.due_date == datetime(2020, 1, 1)

    def test_update_due_date_alone_is_not_checked(self):
        """A due date patched on its own is not compared with the stored issue date."""
        invoice = self._create(issue_date="2024-02-01T00:00:00")

        updated = self._update(invoice.id, due_date="2024-01-01T00:00:00")

        assert updated.due_date == datetime(2024, 1, 1)

    def test_overdue(self):
        """Only unpaid invoices due before the cut-off are overdue."""
        late = self._create(due_date="2024-01-01T00:00:00", status="sent")
        self._create(due_date="2024-01-01T00:00:00", status="cancelled")
        self._create(due_date="2024-06-01T00:00:00", status="sent")

        overdue = ListOverdueInvoicesUseCase(self.invoice_repository).execute(as_of=datetime(2024, 3, 1))

        assert [invoice.id for invoice in overdue] == [late.id]

    def test_search_needs_a_term(self):
        """Blank search terms are rejected."""
        with pytest.raises(ValidationError, match="Search term is required"):
            SearchInvoicesUseCase(self.invoice_repository).execute("   ")

    def test_stats_revenue_by_paid_date_and_client(self):
        """Revenue only counts invoices paid inside the range for the client."""
        invoice = self._create(amount=100)
        self._update(invoice.id, status="sent")
        self._update(invoice.id, status="paid")
        use_case = GetInvoiceStatsUseCase(self.invoice_repository)
        now = datetime.utcnow()

        in_range = use_case.execute(start_date=now - timedelta(days=1), client_id=self.client_id)
        after = use_case.execute(start_date=now + timedelta(days=1))
        other_client = use_case.execute(client_id=self.client_id + 1)

        assert in_range.total_revenue == 100.0
        assert in_range.status_counts["paid"] == 1
        assert after.total_revenue == 0.0
        assert other_client.total_revenue == 0.0

    def test_stats_reject_reversed_range(self):
        """The end date cannot precede the start date."""
        with pytest.raises(ValidationError, match="End date must be after start date"):
            GetInvoiceStatsUseCase(self.invoice_repository).execute(
                start_date=datetime(2024, 2, 1), end_date=datetime(2024, 1, 1)
            )


class TestInvoiceItemUseCases:
    """Test cases for invoice items and invoice recalculation."""

    @pytest.fixture(autouse=True)
    def invoice(self, db_session, client_id):
        self.invoice_repository = SQLAlchemyInvoiceRepository(db_session)
        self.project_repository = SQLAlchemyProjectRepository(db_session)
        self.task_repository = SQLAlchemyTaskRepository(db_session)
        create = CreateInvoiceUseCase(
            self.invoice_repository,
            SQLAlchemyClientRepository(db_session),
            self.project_repository
        )
        self.invoice = create.execute(CreateInvoiceRequestDTO.build({"client_id": client_id, "tax": 10}))

    def _add(self, **data):
        use_case = AddInvoiceItemUseCase(self.invoice_repository, self.project_repository, self.task_repository)
        return use_case.execute(self.invoice.id, CreateInvoiceItemRequestDTO.build(data))

    def test_add_items_updates_invoice(self):
        """The invoice amount follows its items."""
        hourly = self._add(description="Development", hoursWorked=2.5, ratePerHour=80)
        fixed = self._add(description="Hosting", quantity=2, unit_price=15)

        assert hourly.amount == 200.0
        assert fixed.amount == 30.0

        invoice = self.invoice_repository.get_by_id(self.invoice.id)
        assert invoice.amount == 230.0
        assert invoice.total == 240.0
        assert invoice.item_count == 2

    def test_update_item(self):
        """Repricing an item recalculates the invoice."""
        item = self._add(description="Hosting", quantity=2, unit_price=15)

        use_case = UpdateInvoiceItemUseCase(self.invoice_repository, self.project_repository, self.task_repository)
        updated = use_case.execute(self.invoice.id, item.id, UpdateInvoiceItemRequestDTO.build({"unit_price": 20}))

        assert updated.amount == 40.0
        assert self.invoice_repository.get_by_id(self.invoice.id).amount == 40.0

    def test_delete_item(self):
        """Removing an item recalculates the invoice."""
        item = self._add(description="Hosting", quantity=2, unit_price=15)

        DeleteInvoiceItemUseCase(self.invoice_repository).execute(self.invoice.id, item.id)

        invoice = self.invoice_repository.get_by_id(self.invoice.id)
        assert invoice.amount == 0.0
        assert invoice.total == 10.0
        assert invoice.item_count == 0

    def test_item_with_unknown_task(self):
        """Item references must exist."""
        with pytest.raises(EntityNotFoundError, match="Task with id 77 not found"):
            self._add(description="Support", task_id=77)

    def test_item_on_other_invoice(self):
        """Items are looked up within their invoice."""
        item = self._add(description="Hosting")

        with pytest.raises(EntityNotFoundError):
            DeleteInvoiceItemUseCase(self.invoice_repository).execute(self.invoice.id + 1, item.id)
