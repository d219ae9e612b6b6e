# routers/invoices.py
"""
Invoice API routes.

Provides CRUD operations for maintenance invoices and their companion
payments.
Role-based access:
- Landlord: creates, updates and deletes invoices on listings they own
- Tenant: can only see shared invoices whose payment is theirs
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user, require_landlord
from models import InvoiceStatus
from schemas.invoice import (
     InvoiceCreate,
     InvoiceListResponse,
     InvoiceResponse,
     InvoiceStatusEnum,
     InvoiceStatusUpdate,
     InvoiceUpdate,
)
from services import InvoiceService
from services.access import CurrentUser

router = APIRouter(prefix="/invoices", tags=["invoices"])


def _build_invoice_response(invoice) -> InvoiceResponse:
     return InvoiceResponse(**InvoiceService.to_dict(invoice))


def _build_list_response(invoices) -> InvoiceListResponse:
     return InvoiceListResponse(
          invoices=[_build_invoice_response(inv) for inv in invoices],
          total=len(invoices)
     )


@router.post(
     "",
     response_model=InvoiceResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new invoice"
)
def create_invoice(
     invoice_data: InvoiceCreate,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     """
     Bill a maintenance request. A PENDING maintenance payment is created
     alongside the invoice for the listing's current tenant.

     - **maintenance_request_id**: request being billed
     - **description**: what the invoice covers
     - **amount**: invoice amount (must be positive)
     - **shared_with_tenant**: whether the tenant sees the payment (default true)
     """
     invoice = InvoiceService.create_invoice(db, user.id, invoice_data)
     return _build_invoice_response(invoice)


@router.get(
     "",
     response_model=InvoiceListResponse,
     summary="List invoices visible to the caller"
)
def list_invoices(
     status_filter: Optional[InvoiceStatusEnum] = Query(None, alias="status", description="Filter by status"),
     maintenance_request_id: Optional[int] = Query(None, description="Filter by maintenance request"),
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(get_current_user)
):
     """
     **Role-based access:**
     - **Landlord**: invoices on their listings.
     - **Tenant**: shared invoices billed to them.
     """
     invoices = InvoiceService.list_invoices(
          db,
          user,
          status=InvoiceStatus(status_filter.value) if status_filter else None,
          maintenance_request_id=maintenance_request_id,
     )
     return _build_list_response(invoices)


@router.get(
     "/maintenance-request/{maintenance_request_id}",
     response_model=InvoiceListResponse,
     summary="Get invoices for a maintenance request"
)
def get_invoices_by_maintenance_request(
     maintenance_request_id: int,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(get_current_user)
):
     invoices = InvoiceService.list_for_maintenance_request(db, maintenance_request_id, user)
     return _build_list_response(invoices)


@router.get(
     "/{invoice_id}",
     response_model=InvoiceResponse,
     summary="Get invoice by ID"
)
def get_invoice(
     invoice_id: int,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(get_current_user)
):
     return _build_invoice_response(InvoiceService.get_invoice(db, invoice_id, user))


@router.put(
     "/{invoice_id}",
     response_model=InvoiceResponse,
     summary="Update invoice"
)
def update_invoice(
     invoice_id: int,
     invoice_data: InvoiceUpdate,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     """
     Update an existing invoice.

     Only provided fields will be updated. Status and amount changes are
     applied to the companion payment as well.
     """
     invoice = InvoiceService.update_invoice(db, invoice_id, user.id, invoice_data)
     return _build_invoice_response(invoice)


@router.patch(
     "/{invoice_id}/status",
     response_model=InvoiceResponse,
     summary="Update invoice status"
)
def update_invoice_status(
     invoice_id: int,
     data: InvoiceStatusUpdate,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     """
     PAID marks the payment PAID with today's paid date, CANCELLED cancels
     it; any other status leaves the payment PENDING.
     """
     invoice = InvoiceService.update_invoice_status(db, invoice_id, user.id, InvoiceStatus(data.status.value))
     return _build_invoice_response(invoice)


@router.delete(
     "/{invoice_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete invoice"
)
def delete_invoice(
     invoice_id: int,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     """
     Delete an invoice by ID together with its payment.
     """
     InvoiceService.delete_invoice(db, invoice_id, user.id)
     return None
