# schemas/invoice.py
"""
Pydantic schemas for Invoice API request/response validation.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum

from .payment import PaymentResponse


class InvoiceStatusEnum(str, Enum):
     """Invoice status options."""
     PENDING = "PENDING"
     SENT = "SENT"
     PAID = "PAID"
     OVERDUE = "OVERDUE"
     CANCELLED = "CANCELLED"


class InvoiceCreate(BaseModel):
     """Schema for creating a maintenance invoice."""
     maintenance_request_id: int = Field(..., gt=0, description="Maintenance request being billed")
     description: str = Field(..., min_length=1, description="What the invoice covers")
     amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Invoice amount")
     shared_with_tenant: bool = Field(default=True, description="Whether the tenant can see the payment")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "maintenance_request_id": 1,
                    "description": "Replace kitchen faucet",
                    "amount": 180.00,
                    "shared_with_tenant": True
               }
          }
     )


class InvoiceUpdate(BaseModel):
     """Schema for updating an existing invoice. Only provided fields change."""
     description: Optional[str] = Field(None, min_length=1)
     amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     status: Optional[InvoiceStatusEnum] = None
     shared_with_tenant: Optional[bool] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "shared_with_tenant": False
               }
          }
     )


class InvoiceStatusUpdate(BaseModel):
     status: InvoiceStatusEnum

     model_config = ConfigDict(json_schema_extra={"example": {"status": "PAID"}})


class InvoiceResponse(BaseModel):
     """Schema for invoice response."""
     id: int
     maintenance_request_id: int
     payment_id: int
     created_by_id: int
     description: str
     amount: Decimal
     status: InvoiceStatusEnum
     shared_with_tenant: bool
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     # Optional related data
     listing_id: Optional[int] = None
     listing_title: Optional[str] = None
     payment: Optional[PaymentResponse] = None

     model_config = ConfigDict(from_attributes=True)


class InvoiceListResponse(BaseModel):
     """Schema for invoice list response."""
     invoices: List[InvoiceResponse]
     total: int
