# services/payment_service.py
"""
Payment Service - per-viewer payment listings.

Landlords see every payment they are owed. Tenants see their own payments
except maintenance payments whose invoice is not shared with them; the
same row is simply projected differently per viewer.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from exceptions import NotFoundError
from models import Invoice, Payment, PaymentStatus, PaymentType
from services.access import CurrentUser
from utils.dates import utcnow


class PaymentService:
     """Service class for payment-related business logic."""

     @staticmethod
     def visible_payments(db: Session, user: CurrentUser) -> Query:
          if user.is_landlord:
               return db.query(Payment).filter(Payment.landlord_id == user.id)
          return (
               db.query(Payment)
               .outerjoin(Invoice, Invoice.payment_id == Payment.id)
               .filter(
                    Payment.tenant_id == user.id,
                    or_(Invoice.id.is_(None), Invoice.shared_with_tenant == True),  # noqa: E712
               )
          )

     @staticmethod
     def list_payments(
          db: Session,
          user: CurrentUser,
          status: Optional[PaymentStatus] = None,
          payment_type: Optional[PaymentType] = None,
     ) -> list[Payment]:
          query = PaymentService.visible_payments(db, user)
          if status is not None:
               query = query.filter(Payment.status == status)
          if payment_type is not None:
               query = query.filter(Payment.type == payment_type)
          return query.order_by(Payment.due_date.desc(), Payment.id.desc()).all()

     @staticmethod
     def get_payment(db: Session, payment_id: int, user: CurrentUser) -> Payment:
          payment = PaymentService.visible_payments(db, user).filter(Payment.id == payment_id).first()
          if payment is None:
               raise NotFoundError(f"Payment with ID {payment_id} not found")
          return payment

     @staticmethod
     def summarize(payments: list[Payment], now: Optional[datetime] = None) -> dict:
          """
          Totals over the given payments.

          ``outstanding`` covers every PENDING payment; ``overdue`` is the
          subset already past its due date.
          """
          now = now or utcnow()
          pending = [p for p in payments if p.status == PaymentStatus.PENDING]
          overdue = [p for p in pending if p.due_date is not None and p.due_date < now]
          paid = [p for p in payments if p.status == PaymentStatus.PAID]

          return {
               "outstanding": sum((p.amount for p in pending), Decimal("0")),
               "overdue": sum((p.amount for p in overdue), Decimal("0")),
               "paid": sum((p.amount for p in paid), Decimal("0")),
               "pending_count": len(pending),
               "overdue_count": len(overdue),
               "paid_count": len(paid),
          }

     @staticmethod
     def to_dict(payment: Payment) -> dict:
          return {
               "id": payment.id,
               "type": payment.type.value,
               "amount": payment.amount,
               "status": payment.status.value,
               "due_date": payment.due_date,
               "paid_date": payment.paid_date,
               "landlord_id": payment.landlord_id,
               "tenant_id": payment.tenant_id,
               "lease_id": payment.lease_id,
               "notes": payment.notes,
               "invoice_id": payment.invoice.id if payment.invoice else None,
               "created_at": payment.created_at,
          }
