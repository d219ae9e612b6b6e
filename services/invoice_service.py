# services/invoice_service.py
"""
Invoice Service - Business logic layer for maintenance invoices.

Every invoice owns one companion Payment. The pair is created together,
kept in status/amount sync and deleted together, each time in a single
transaction, so neither row is ever observed without the other.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from database import atomic
from exceptions import ForbiddenError, NotFoundError
from models import (
     Invoice,
     InvoiceStatus,
     Listing,
     MaintenanceRequest,
     Payment,
     PaymentStatus,
     PaymentType,
)
from schemas.invoice import InvoiceCreate, InvoiceUpdate
from services.access import CurrentUser
from services.lease_service import find_active_lease_for_listing
from services.payment_service import PaymentService
from utils.dates import utcnow

logger = logging.getLogger(__name__)

# Days from invoice creation to the companion payment's due date
PAYMENT_DUE_DAYS = 30


class InvoiceService:
     """Service class for invoice-related business logic."""

     @staticmethod
     def map_payment_status(invoice_status: InvoiceStatus, now: datetime) -> tuple[PaymentStatus, Optional[datetime]]:
          """
          Payment status (and paid date) implied by an invoice status.

          PAID and CANCELLED carry over; every other invoice status leaves
          the payment PENDING.
          """
          if invoice_status == InvoiceStatus.PAID:
               return PaymentStatus.PAID, now
          if invoice_status == InvoiceStatus.CANCELLED:
               return PaymentStatus.CANCELLED, None
          return PaymentStatus.PENDING, None

     @staticmethod
     def _get_maintenance_request(db: Session, maintenance_request_id: int, landlord_id: int) -> MaintenanceRequest:
          request = db.get(MaintenanceRequest, maintenance_request_id)
          if request is None:
               raise NotFoundError(f"Maintenance request with ID {maintenance_request_id} not found")
          if request.listing is None or request.listing.landlord_id != landlord_id:
               raise ForbiddenError("You do not own the listing for this maintenance request")
          return request

     @staticmethod
     def _get_owned_invoice(db: Session, invoice_id: int, landlord_id: int) -> Invoice:
          invoice = db.get(Invoice, invoice_id)
          if invoice is None:
               raise NotFoundError(f"Invoice with ID {invoice_id} not found")
          listing = invoice.maintenance_request.listing if invoice.maintenance_request else None
          if listing is None or listing.landlord_id != landlord_id:
               raise ForbiddenError("You do not have permission to modify this invoice")
          return invoice

     @staticmethod
     def _can_view(invoice: Invoice, user: CurrentUser) -> bool:
          listing = invoice.maintenance_request.listing if invoice.maintenance_request else None
          if listing is not None and listing.landlord_id == user.id:
               return True
          return bool(invoice.shared_with_tenant and invoice.payment and invoice.payment.tenant_id == user.id)

     @staticmethod
     def create_invoice(db: Session, landlord_id: int, data: InvoiceCreate) -> Invoice:
          """
          Bill a maintenance request to the tenant of its listing.

          The tenant is taken from the listing's active lease, falling back to
          the user who filed the request.
          """
          request = InvoiceService._get_maintenance_request(db, data.maintenance_request_id, landlord_id)
          now = utcnow()
          lease = find_active_lease_for_listing(db, request.listing_id, now)
          tenant_id = lease.tenant_id if lease else request.user_id

          with atomic(db):
               payment = Payment(
                    type=PaymentType.MAINTENANCE,
                    amount=data.amount,
                    status=PaymentStatus.PENDING,
                    due_date=now + timedelta(days=PAYMENT_DUE_DAYS),
                    landlord_id=landlord_id,
                    tenant_id=tenant_id,
                    lease_id=lease.id if lease else None,
                    notes=f"Maintenance: {request.title}",
               )
               db.add(payment)
               db.flush()

               invoice = Invoice(
                    maintenance_request_id=request.id,
                    payment_id=payment.id,
                    created_by_id=landlord_id,
                    description=data.description,
                    amount=data.amount,
                    status=InvoiceStatus.PENDING,
                    shared_with_tenant=data.shared_with_tenant,
               )
               db.add(invoice)

          logger.info(
               "Invoice %s created for maintenance request %s (payment %s, tenant %s)",
               invoice.id, request.id, payment.id, tenant_id,
          )
          return invoice

     @staticmethod
     def get_invoice(db: Session, invoice_id: int, user: CurrentUser) -> Invoice:
          invoice = db.get(Invoice, invoice_id)
          if invoice is None or not InvoiceService._can_view(invoice, user):
               raise NotFoundError(f"Invoice with ID {invoice_id} not found")
          return invoice

     @staticmethod
     def list_invoices(
          db: Session,
          user: CurrentUser,
          status: Optional[InvoiceStatus] = None,
          maintenance_request_id: Optional[int] = None,
     ) -> list[Invoice]:
          """
          Landlords see every invoice on their listings; tenants only shared
          invoices whose payment is theirs.
          """
          query = db.query(Invoice)
          if user.is_landlord:
               query = (
                    query.join(MaintenanceRequest, Invoice.maintenance_request_id == MaintenanceRequest.id)
                    .join(Listing, MaintenanceRequest.listing_id == Listing.id)
                    .filter(Listing.landlord_id == user.id)
               )
          else:
               query = (
                    query.join(Payment, Invoice.payment_id == Payment.id)
                    .filter(Payment.tenant_id == user.id, Invoice.shared_with_tenant == True)  # noqa: E712
               )

          if status is not None:
               query = query.filter(Invoice.status == status)
          if maintenance_request_id is not None:
               query = query.filter(Invoice.maintenance_request_id == maintenance_request_id)
          return query.order_by(Invoice.created_at.desc(), Invoice.id.desc()).all()

     @staticmethod
     def list_for_maintenance_request(db: Session, maintenance_request_id: int, user: CurrentUser) -> list[Invoice]:
          if db.get(MaintenanceRequest, maintenance_request_id) is None:
               raise NotFoundError(f"Maintenance request with ID {maintenance_request_id} not found")
          return InvoiceService.list_invoices(db, user, maintenance_request_id=maintenance_request_id)

     @staticmethod
     def update_invoice(db: Session, invoice_id: int, landlord_id: int, data: InvoiceUpdate) -> Invoice:
          """
          Update an existing invoice. Only provided fields change; status and
          amount are mirrored onto the payment in the same transaction.
          """
          invoice = InvoiceService._get_owned_invoice(db, invoice_id, landlord_id)
          changes = data.model_dump(exclude_unset=True)

          with atomic(db):
               if changes.get("description") is not None:
                    invoice.description = changes["description"]
               if changes.get("shared_with_tenant") is not None:
                    invoice.shared_with_tenant = changes["shared_with_tenant"]
               if changes.get("amount") is not None:
                    invoice.amount = changes["amount"]
                    invoice.payment.amount = changes["amount"]
               if changes.get("status") is not None:
                    InvoiceService._apply_status(invoice, InvoiceStatus(changes["status"]))

          logger.info("Invoice %s updated: %s", invoice.id, sorted(changes))
          return invoice

     @staticmethod
     def _apply_status(invoice: Invoice, status: InvoiceStatus) -> None:
          payment_status, paid_date = InvoiceService.map_payment_status(status, utcnow())
          invoice.status = status
          invoice.payment.status = payment_status
          invoice.payment.paid_date = paid_date

     @staticmethod
     def update_invoice_status(db: Session, invoice_id: int, landlord_id: int, status: InvoiceStatus) -> Invoice:
          invoice = InvoiceService._get_owned_invoice(db, invoice_id, landlord_id)
          with atomic(db):
               InvoiceService._apply_status(invoice, InvoiceStatus(status))
          logger.info(
               "Invoice %s status set to %s (payment %s -> %s)",
               invoice.id, invoice.status.value, invoice.payment_id, invoice.payment.status.value,
          )
          return invoice

     @staticmethod
     def delete_invoice(db: Session, invoice_id: int, landlord_id: int) -> None:
          invoice = InvoiceService._get_owned_invoice(db, invoice_id, landlord_id)
          payment = invoice.payment
          with atomic(db):
               db.delete(invoice)
               db.flush()
               if payment is not None:
                    db.delete(payment)
          logger.info("Invoice %s and payment %s deleted", invoice_id, payment.id if payment else None)

     @staticmethod
     def to_dict(invoice: Invoice, include_payment: bool = True) -> dict:
          listing = invoice.maintenance_request.listing if invoice.maintenance_request else None
          data = {
               "id": invoice.id,
               "maintenance_request_id": invoice.maintenance_request_id,
               "payment_id": invoice.payment_id,
               "created_by_id": invoice.created_by_id,
               "description": invoice.description,
               "amount": invoice.amount,
               "status": invoice.status.value,
               "shared_with_tenant": invoice.shared_with_tenant,
               "created_at": invoice.created_at,
               "updated_at": invoice.updated_at,
               "listing_id": listing.id if listing else None,
               "listing_title": listing.title if listing else None,
          }
          if include_payment and invoice.payment is not None:
               data["payment"] = PaymentService.to_dict(invoice.payment)
          return data
