"""
Invoice management router.
Handles invoice CRUD, numbering, overdue/stats/search views and invoice items.
"""

from datetime import datetime
from typing import Annotated, List, Optional
from fastapi import APIRouter, Depends, status, Query

from bizdesk.application.use_cases.invoice_use_cases import (
    CreateInvoiceUseCase,
    UpdateInvoiceUseCase,
    GetInvoiceUseCase,
    ListInvoicesUseCase,
    DeleteInvoiceUseCase,
    GenerateInvoiceNumberUseCase,
    ListOverdueInvoicesUseCase,
    SearchInvoicesUseCase,
    GetInvoiceStatsUseCase,
    AddInvoiceItemUseCase,
    UpdateInvoiceItemUseCase,
    DeleteInvoiceItemUseCase,
    ListInvoiceItemsUseCase
)
from bizdesk.application.dto.base_dto import ListResponseDTO
from bizdesk.application.dto.invoice_dto import (
    CreateInvoiceRequestDTO,
    UpdateInvoiceRequestDTO,
    InvoiceResponseDTO,
    CreateInvoiceItemRequestDTO,
    UpdateInvoiceItemRequestDTO,
    InvoiceItemResponseDTO,
    NextInvoiceNumberResponseDTO,
    InvoiceStatsResponseDTO
)
from bizdesk.config import settings
from bizdesk.domain.models.invoice import InvoiceStatus
from bizdesk.infrastructure.repositories.client_repository import SQLAlchemyClientRepository
from bizdesk.infrastructure.repositories.invoice_repository import SQLAlchemyInvoiceRepository
from bizdesk.infrastructure.repositories.project_repository import SQLAlchemyProjectRepository
from bizdesk.infrastructure.repositories.task_repository import SQLAlchemyTaskRepository
from bizdesk.infrastructure.web.dependencies import (
    get_client_repository,
    get_invoice_repository,
    get_project_repository,
    get_task_repository
)


router = APIRouter()

InvoiceRepositoryDep = Annotated[SQLAlchemyInvoiceRepository, Depends(get_invoice_repository)]
ClientRepositoryDep = Annotated[SQLAlchemyClientRepository, Depends(get_client_repository)]
ProjectRepositoryDep = Annotated[SQLAlchemyProjectRepository, Depends(get_project_repository)]
TaskRepositoryDep = Annotated[SQLAlchemyTaskRepository, Depends(get_task_repository)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=InvoiceResponseDTO)
def create_invoice(
    request: CreateInvoiceRequestDTO,
    repository: InvoiceRepositoryDep,
    client_repository: ClientRepositoryDep,
    project_repository: ProjectRepositoryDep
):
    """
    Create a new invoice.

    Fields are accepted in snake_case or camelCase.

    - **client_id**: Client to invoice (required)
    - **project_id**: Associated project (optional)
    - **invoice_number**: Invoice number (generated if not provided)
    - **amount**: Amount before tax (default: 0)
    - **tax**: Tax amount (default: 0)
    - **total**: Total (default: amount + tax)
    - **status**: draft, sent, paid, overdue, cancelled (default: draft)
    - **issue_date**: Issue date (default: now)
    - **due_date**: Payment due date
    - **notes**: Additional notes
    """
    use_case = CreateInvoiceUseCase(repository, client_repository, project_repository)
    invoice = use_case.execute(request)
    return InvoiceResponseDTO.from_domain(invoice)


@router.get("", response_model=ListResponseDTO[InvoiceResponseDTO])
def list_invoices(
    repository: InvoiceRepositoryDep,
    client_id: Optional[int] = Query(None, description="Filter by client ID"),
    project_id: Optional[int] = Query(None, description="Filter by project ID"),
    status: Optional[InvoiceStatus] = Query(None, description="Filter by invoice status"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    offset: int = Query(0, ge=0)
):
    """
    List invoices, most recent issue date first.

    - **client_id**: Filter by specific client
    - **project_id**: Filter by specific project
    - **status**: Filter by invoice status
    - **limit**: Maximum number of invoices to return
    - **offset**: Number of invoices to skip for pagination
    """
    use_case = ListInvoicesUseCase(repository)
    result = use_case.execute(client_id, project_id, status, limit, offset)
    return ListResponseDTO[InvoiceResponseDTO](
        items=[InvoiceResponseDTO.from_domain(invoice) for invoice in result.items],
        total=result.total,
        limit=result.limit,
        offset=result.offset
    )


@router.get("/next-number", response_model=NextInvoiceNumberResponseDTO)
def get_next_invoice_number(repository: InvoiceRepositoryDep):
    """
    Get the next sequential invoice number.
    The number is a suggestion; uniqueness is checked again on create.
    """
    use_case = GenerateInvoiceNumberUseCase(repository)
    return NextInvoiceNumberResponseDTO(invoice_number=use_case.execute())


@router.get("/overdue", response_model=List[InvoiceResponseDTO])
def list_overdue_invoices(repository: InvoiceRepositoryDep):
    """
    List unpaid, uncancelled invoices whose due date has passed,
    earliest due date first.
    """
    use_case = ListOverdueInvoicesUseCase(repository)
    return [InvoiceResponseDTO.from_domain(invoice) for invoice in use_case.execute()]


@router.get("/stats", response_model=InvoiceStatsResponseDTO)
def get_invoice_stats(
    repository: InvoiceRepositoryDep,
    start_date: Optional[datetime] = Query(None, description="Revenue paid on or after this date"),
    end_date: Optional[datetime] = Query(None, description="Revenue paid on or before this date"),
    client_id: Optional[int] = Query(None, description="Revenue for one client")
):
    """
    Get invoice counts per status, revenue and pending amounts.

    - **start_date**, **end_date**: limit revenue to a paid-date range
    - **client_id**: limit revenue to one client
    """
    use_case = GetInvoiceStatsUseCase(repository)
    return InvoiceStatsResponseDTO.from_stats(use_case.execute(start_date, end_date, client_id))


@router.get("/search", response_model=List[InvoiceResponseDTO])
def search_invoices(
    repository: InvoiceRepositoryDep,
    q: Optional[str] = Query(None, description="Text to find in invoice numbers or client names"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size)
):
    """
    Search invoices by number or client name, newest first.
    """
    use_case = SearchInvoicesUseCase(repository)
    return [InvoiceResponseDTO.from_domain(invoice) for invoice in use_case.execute(q, limit)]


@router.get("/{invoice_id}", response_model=InvoiceResponseDTO)
def get_invoice(invoice_id: int, repository: InvoiceRepositoryDep):
    """
    Get invoice details by ID.
    """
    use_case = GetInvoiceUseCase(repository)
    return InvoiceResponseDTO.from_domain(use_case.execute(invoice_id))


@router.put("/{invoice_id}", response_model=InvoiceResponseDTO)
@router.patch("/{invoice_id}", response_model=InvoiceResponseDTO)
def update_invoice(
    invoice_id: int,
    request: UpdateInvoiceRequestDTO,
    repository: InvoiceRepositoryDep,
    client_repository: ClientRepositoryDep,
    project_repository: ProjectRepositoryDep
):
    """
    Update an invoice. Only the fields sent are changed.

    Changing **status** follows draft -> sent -> paid/overdue; paid and
    cancelled invoices cannot change status. Changing **amount** or **tax**
    without a **total** recomputes the total.
    """
    use_case = UpdateInvoiceUseCase(repository, client_repository, project_repository)
    invoice = use_case.execute(invoice_id, request)
    return InvoiceResponseDTO.from_domain(invoice)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_invoice(invoice_id: int, repository: InvoiceRepositoryDep):
    """
    Delete an invoice and its items.
    """
    use_case = DeleteInvoiceUseCase(repository)
    use_case.execute(invoice_id)


@router.get("/{invoice_id}/items", response_model=List[InvoiceItemResponseDTO])
def list_invoice_items(invoice_id: int, repository: InvoiceRepositoryDep):
    """
    List the items of an invoice.
    """
    use_case = ListInvoiceItemsUseCase(repository)
    return [InvoiceItemResponseDTO.from_domain(item) for item in use_case.execute(invoice_id)]


@router.post(
    "/{invoice_id}/items",
    status_code=status.HTTP_201_CREATED,
    response_model=InvoiceItemResponseDTO
)
def add_invoice_item(
    invoice_id: int,
    request: CreateInvoiceItemRequestDTO,
    repository: InvoiceRepositoryDep,
    project_repository: ProjectRepositoryDep,
    task_repository: TaskRepositoryDep
):
    """
    Add an item to an invoice and recompute the invoice amount.

    - **description**: Item description (required)
    - **hours_worked** and **rate_per_hour**: bill hours at a rate
    - **quantity** and **unit_price**: bill a fixed quantity (default 1 x 0)
    - **project_id**, **task_id**: optional references
    """
    use_case = AddInvoiceItemUseCase(repository, project_repository, task_repository)
    item = use_case.execute(invoice_id, request)
    return InvoiceItemResponseDTO.from_domain(item)


@router.put("/{invoice_id}/items/{item_id}", response_model=InvoiceItemResponseDTO)
@router.patch("/{invoice_id}/items/{item_id}", response_model=InvoiceItemResponseDTO)
def update_invoice_item(
    invoice_id: int,
    item_id: int,
    request: UpdateInvoiceItemRequestDTO,
    repository: InvoiceRepositoryDep,
    project_repository: ProjectRepositoryDep,
    task_repository: TaskRepositoryDep
):
    """
    Update an invoice item and recompute the invoice amount.
    """
    use_case = UpdateInvoiceItemUseCase(repository, project_repository, task_repository)
    item = use_case.execute(invoice_id, item_id, request)
    return InvoiceItemResponseDTO.from_domain(item)


@router.delete("/{invoice_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_invoice_item(invoice_id: int, item_id: int, repository: InvoiceRepositoryDep):
    """
    Remove an item from an invoice and recompute the invoice amount.
    """
    use_case = DeleteInvoiceItemUseCase(repository)
    use_case.execute(invoice_id, item_id)
