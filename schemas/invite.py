# schemas/invite.py
"""
Pydantic schemas for lease invites and signing.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .lease import LeaseResponse, LeaseStatusEnum, LeaseTypeEnum


class InviteCreate(BaseModel):
     lease_type: LeaseTypeEnum = Field(..., description="Which lease variant the id refers to")
     tenant_id: Optional[int] = Field(
          None,
          gt=0,
          description="Intended tenant; informational only, the invite binds whoever signs it",
     )

     model_config = ConfigDict(json_schema_extra={"example": {"lease_type": "STANDARD"}})


class InviteResponse(BaseModel):
     id: int
     token: str
     url: str
     lease_id: int
     lease_type: LeaseTypeEnum
     tenant_id: Optional[int] = None
     signed: bool
     signed_at: Optional[datetime] = None
     expires_at: datetime
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class InviteLeaseTerms(BaseModel):
     """Key terms shown on the signing page."""
     lease_id: int
     lease_type: LeaseTypeEnum
     status: LeaseStatusEnum
     start_date: Optional[datetime] = None
     end_date: Optional[datetime] = None
     rent_amount: Optional[Decimal] = None
     security_deposit: Optional[Decimal] = None
     payment_frequency: Optional[str] = None
     listing_title: Optional[str] = None
     property_address: Optional[str] = None
     landlord_name: Optional[str] = None
     lease_name: Optional[str] = None
     file_url: Optional[str] = None
     contract_url: Optional[str] = None


class InviteLookupResponse(BaseModel):
     invite: InviteResponse
     lease: InviteLeaseTerms


class SignLeaseRequest(BaseModel):
     user_id: int = Field(..., gt=0, description="User signing the lease")


class SignLeaseResponse(BaseModel):
     message: str = "Lease signed successfully"
     invite: InviteResponse
     lease: LeaseResponse
