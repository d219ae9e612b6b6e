# schemas/lease.py
"""
Pydantic schemas for standard and custom leases.
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LeaseTypeEnum(str, Enum):
     STANDARD = "STANDARD"
     CUSTOM = "CUSTOM"


class LeaseStatusEnum(str, Enum):
     DRAFT = "DRAFT"
     ACTIVE = "ACTIVE"
     EXPIRED = "EXPIRED"
     TERMINATED = "TERMINATED"


class _LeasePeriod(BaseModel):
     @model_validator(mode="after")
     def _end_after_start(self):
          start = getattr(self, "start_date", None)
          end = getattr(self, "end_date", None)
          if start is not None and end is not None and end <= start:
               raise ValueError("end_date must be after start_date")
          return self


class StandardLeaseCreate(_LeasePeriod):
     """Schema for creating a standard (form-rendered) lease."""
     listing_id: int = Field(..., gt=0)
     tenant_id: Optional[int] = Field(None, gt=0)
     start_date: datetime
     end_date: datetime
     rent_amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
     security_deposit: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     payment_frequency: str = Field("MONTHLY", max_length=20)
     lease_term_type: Optional[str] = Field(None, max_length=50)
     payment_day: Optional[int] = Field(None, ge=1, le=31)
     notes: Optional[str] = None

     # Document snapshot overrides; defaults come from the landlord/tenant/listing rows
     landlord_full_name: Optional[str] = None
     landlord_email: Optional[str] = None
     landlord_phone: Optional[str] = None
     landlord_address: Optional[str] = None
     tenant_full_name: Optional[str] = None
     tenant_email: Optional[str] = None
     tenant_phone: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "listing_id": 1,
                    "start_date": "2026-12-01T00:00:00",
                    "end_date": "2027-11-30T00:00:00",
                    "rent_amount": 2400.00,
                    "security_deposit": 1200.00,
                    "payment_frequency": "MONTHLY",
               }
          }
     )


class CustomLeaseCreate(_LeasePeriod):
     """Schema for creating a custom (uploaded document) lease."""
     listing_id: int = Field(..., gt=0)
     tenant_id: Optional[int] = Field(None, gt=0)
     lease_name: str = Field(..., min_length=1, max_length=255)
     description: Optional[str] = None
     property_type: Optional[str] = Field(None, max_length=50)
     file_url: Optional[str] = Field(None, max_length=1000)
     start_date: Optional[datetime] = None
     end_date: Optional[datetime] = None
     rent_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     security_deposit: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     payment_frequency: Optional[str] = Field(None, max_length=20)
     notes: Optional[str] = None


# Sent as null these would wipe a value every lease must keep
NON_NULLABLE_UPDATES = ("end_date", "rent_amount", "lease_name")


class _LeaseUpdate(BaseModel):
     @model_validator(mode="after")
     def _no_null_required_fields(self):
          for name in NON_NULLABLE_UPDATES:
               if name in self.model_fields_set and getattr(self, name, None) is None:
                    raise ValueError(f"{name} cannot be null")
          return self


class StandardLeaseUpdate(_LeaseUpdate):
     end_date: Optional[datetime] = None
     rent_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     payment_frequency: Optional[str] = Field(None, max_length=20)
     notes: Optional[str] = None

     model_config = ConfigDict(extra="forbid")


class CustomLeaseUpdate(_LeaseUpdate):
     lease_name: Optional[str] = Field(None, min_length=1, max_length=255)
     description: Optional[str] = None
     file_url: Optional[str] = Field(None, max_length=1000)
     end_date: Optional[datetime] = None
     rent_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     notes: Optional[str] = None

     model_config = ConfigDict(extra="forbid")


class LeaseTerminate(BaseModel):
     reason: str = Field(..., min_length=1, max_length=255)
     notes: Optional[str] = None
     termination_date: Optional[datetime] = None


class LeaseResponse(BaseModel):
     """Both variants share this shape; variant-only fields are null on the other."""
     id: int
     lease_type: LeaseTypeEnum
     listing_id: Optional[int] = None
     landlord_id: int
     tenant_id: Optional[int] = None
     status: LeaseStatusEnum
     start_date: Optional[datetime] = None
     end_date: Optional[datetime] = None
     rent_amount: Optional[Decimal] = None
     security_deposit: Optional[Decimal] = None
     payment_frequency: Optional[str] = None
     notes: Optional[str] = None
     termination_date: Optional[datetime] = None
     termination_reason: Optional[str] = None
     termination_notes: Optional[str] = None
     terminated_by: Optional[int] = None
     created_at: Optional[datetime] = None

     # Standard only
     lease_term_type: Optional[str] = None
     payment_day: Optional[int] = None
     document_snapshot: Optional[Dict[str, Any]] = None
     contract_url: Optional[str] = None

     # Custom only
     lease_name: Optional[str] = None
     description: Optional[str] = None
     property_type: Optional[str] = None
     file_url: Optional[str] = None


class LeaseListResponse(BaseModel):
     leases: List[LeaseResponse]
     total: int
