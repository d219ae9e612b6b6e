# schemas/application.py
"""
Pydantic schemas for rental application request/response validation.
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .lease import LeaseResponse


class ApplicationStatusEnum(str, Enum):
     NEW = "NEW"
     APPROVED = "APPROVED"
     REJECTED = "REJECTED"
     CANCELLED = "CANCELLED"


class ApplicationDecisionEnum(str, Enum):
     """Statuses a landlord may move a NEW application to."""
     APPROVED = "APPROVED"
     REJECTED = "REJECTED"
     CANCELLED = "CANCELLED"


class EmploymentInfoIn(BaseModel):
     employer_name: str = Field(..., min_length=1, max_length=255)
     job_title: Optional[str] = Field(None, max_length=255)
     income: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     duration: Optional[str] = Field(None, max_length=100)
     address: Optional[str] = Field(None, max_length=500)
     proof_document: Optional[str] = Field(None, max_length=1000)


class EmploymentInfoResponse(EmploymentInfoIn):
     id: int

     model_config = ConfigDict(from_attributes=True)


class ApplicantFields(BaseModel):
     """Fields the applicant fills in."""
     phone: Optional[str] = Field(None, max_length=50)
     date_of_birth: Optional[datetime] = None
     monthly_income: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     current_address: Optional[str] = Field(None, max_length=500)
     move_in_date: Optional[datetime] = None
     occupants: Optional[Any] = None
     pets: Optional[Any] = None
     documents: Optional[Any] = None
     references: Optional[Any] = None
     message: Optional[str] = None
     employment_info: List[EmploymentInfoIn] = Field(default_factory=list)


class ApplicationCreate(ApplicantFields):
     """
     Schema for a landlord creating an application.

     Leaving ``full_name``/``email`` empty creates a placeholder link for
     the applicant to fill in.
     """
     listing_id: int = Field(..., gt=0, description="Listing the application is for (must be owned by caller)")
     tenant_id: Optional[int] = Field(None, gt=0, description="Applicant's user account, if known")
     full_name: Optional[str] = Field(None, min_length=1, max_length=200)
     email: Optional[str] = Field(None, min_length=3, max_length=255)
     expiration_date: Optional[datetime] = Field(None, description="Public link stops accepting submissions after this")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "listing_id": 1,
                    "expiration_date": "2026-12-31T23:59:59",
               }
          }
     )


class ApplicationSubmit(ApplicantFields):
     """Schema for the public applicant submission."""
     full_name: str = Field(..., min_length=1, max_length=200)
     email: str = Field(..., min_length=3, max_length=255)
     tenant_id: Optional[int] = Field(None, gt=0, description="Applicant's user account")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "full_name": "Jane Doe",
                    "email": "jane@example.com",
                    "phone": "+1 604 555 0101",
                    "move_in_date": "2026-12-01T00:00:00",
                    "employment_info": [
                         {"employer_name": "Acme", "job_title": "Engineer", "income": 6500}
                    ],
               }
          }
     )


class ApplicationStatusUpdate(BaseModel):
     status: ApplicationDecisionEnum
     decision_notes: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={"example": {"status": "APPROVED", "decision_notes": "Great references"}}
     )


class ApplicationBulkDelete(BaseModel):
     ids: List[int] = Field(..., min_length=1)


class ApplicationResponse(BaseModel):
     id: int
     public_id: str
     listing_id: int
     landlord_id: int
     tenant_id: Optional[int] = None
     full_name: str
     email: str
     phone: Optional[str] = None
     date_of_birth: Optional[datetime] = None
     monthly_income: Optional[Decimal] = None
     current_address: Optional[str] = None
     move_in_date: Optional[datetime] = None
     occupants: Optional[Any] = None
     pets: Optional[Any] = None
     documents: Optional[Any] = None
     references: Optional[Any] = None
     message: Optional[str] = None
     status: ApplicationStatusEnum
     expiration_date: Optional[datetime] = None
     reviewed_by: Optional[int] = None
     reviewed_at: Optional[datetime] = None
     decision_notes: Optional[str] = None
     lease_id: Optional[int] = None
     is_placeholder: bool = False
     share_url: Optional[str] = None
     employment_info: List[EmploymentInfoResponse] = Field(default_factory=list)
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class ApplicationListResponse(BaseModel):
     applications: List[ApplicationResponse]
     total: int
     page: int = 1
     page_size: int = 10


class ApplicationDecisionResponse(BaseModel):
     application: ApplicationResponse
     lease: Optional[LeaseResponse] = None


class PublicListingSummary(BaseModel):
     id: int
     title: str
     street_address: Optional[str] = None
     city: Optional[str] = None
     state: Optional[str] = None
     rent_amount: Optional[Decimal] = None
     security_deposit: Optional[Decimal] = None

     model_config = ConfigDict(from_attributes=True)


class LandlordContact(BaseModel):
     id: int
     first_name: str
     last_name: str
     email: str
     phone: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)


class PublicApplicationResponse(BaseModel):
     application: ApplicationResponse
     listing: PublicListingSummary
     landlord: LandlordContact
