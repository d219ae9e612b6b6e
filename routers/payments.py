# routers/payments.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user
from models import PaymentStatus, PaymentType
from schemas.payment import (
     PaymentListResponse,
     PaymentResponse,
     PaymentStatusEnum,
     PaymentSummary,
     PaymentTypeEnum,
)
from services import PaymentService
from services.access import CurrentUser

router = APIRouter(prefix="/payments", tags=["payments"])


@router.get("", response_model=PaymentListResponse)
def list_payments(
     status_filter: Optional[PaymentStatusEnum] = Query(None, alias="status", description="Filter by status"),
     payment_type: Optional[PaymentTypeEnum] = Query(None, alias="type", description="Filter by payment type"),
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(get_current_user),
):
     """
     Landlords see every payment owed to them. Tenants do not see
     maintenance payments whose invoice is not shared with them.
     """
     payments = PaymentService.list_payments(
          db,
          user,
          status=PaymentStatus(status_filter.value) if status_filter else None,
          payment_type=PaymentType(payment_type.value) if payment_type else None,
     )
     return PaymentListResponse(
          payments=[PaymentResponse(**PaymentService.to_dict(p)) for p in payments],
          total=len(payments),
          summary=PaymentSummary(**PaymentService.summarize(payments)),
     )


@router.get("/summary", response_model=PaymentSummary)
def payment_summary(
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(get_current_user),
):
     payments = PaymentService.list_payments(db, user)
     return PaymentSummary(**PaymentService.summarize(payments))


@router.get("/{payment_id}", response_model=PaymentResponse)
def get_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(get_current_user),
):
     return PaymentResponse(**PaymentService.to_dict(PaymentService.get_payment(db, payment_id, user)))
