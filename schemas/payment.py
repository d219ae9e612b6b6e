# schemas/payment.py
"""
Pydantic schemas for payment listings.
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class PaymentTypeEnum(str, Enum):
     RENT = "RENT"
     DEPOSIT = "DEPOSIT"
     MAINTENANCE = "MAINTENANCE"
     OTHER = "OTHER"


class PaymentStatusEnum(str, Enum):
     PENDING = "PENDING"
     PAID = "PAID"
     CANCELLED = "CANCELLED"


class PaymentResponse(BaseModel):
     id: int
     type: PaymentTypeEnum
     amount: Decimal
     status: PaymentStatusEnum
     due_date: Optional[datetime] = None
     paid_date: Optional[datetime] = None
     landlord_id: int
     tenant_id: Optional[int] = None
     lease_id: Optional[int] = None
     notes: Optional[str] = None
     invoice_id: Optional[int] = None
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class PaymentSummary(BaseModel):
     """Totals over the payments the viewer can see."""
     outstanding: Decimal = Field(default=Decimal("0"))
     overdue: Decimal = Field(default=Decimal("0"))
     paid: Decimal = Field(default=Decimal("0"))
     pending_count: int = 0
     overdue_count: int = 0
     paid_count: int = 0


class PaymentListResponse(BaseModel):
     payments: List[PaymentResponse]
     total: int
     summary: PaymentSummary
