# models/lease.py
"""
Lease models - one status lifecycle, two variants.

``Lease`` holds everything the lifecycle needs (owner, tenant, status,
dates, rent terms, termination record). ``StandardLease`` adds the frozen
document snapshot used to render the fixed-layout contract;
``CustomLease`` references an uploaded document instead. The variant is
selected by the ``lease_type`` discriminator (joined-table inheritance).
"""
import enum
from dataclasses import asdict, dataclass, fields
from typing import Optional

from sqlalchemy import (
     Column, Integer, String, Numeric, Text, DateTime, ForeignKey, Enum, JSON, func
)
from sqlalchemy.orm import relationship
from .base import Base


class LeaseType(str, enum.Enum):
     STANDARD = "STANDARD"
     CUSTOM = "CUSTOM"


class LeaseStatus(str, enum.Enum):
     """DRAFT -> ACTIVE -> {EXPIRED, TERMINATED}. Nothing returns to DRAFT."""
     DRAFT = "DRAFT"
     ACTIVE = "ACTIVE"
     EXPIRED = "EXPIRED"
     TERMINATED = "TERMINATED"


@dataclass(frozen=True)
class LeaseDocumentSnapshot:
     """
     Landlord, tenant and property details as they stood when the lease
     document was drafted. Independent of the live User/Listing rows.
     """
     landlord_full_name: Optional[str] = None
     landlord_email: Optional[str] = None
     landlord_phone: Optional[str] = None
     landlord_address: Optional[str] = None
     tenant_full_name: Optional[str] = None
     tenant_email: Optional[str] = None
     tenant_phone: Optional[str] = None
     property_address: Optional[str] = None
     unit_number: Optional[str] = None
     property_city: Optional[str] = None
     property_state: Optional[str] = None
     property_country: Optional[str] = None
     property_zip_code: Optional[str] = None
     property_category: Optional[str] = None

     def to_dict(self) -> dict:
          return asdict(self)

     @classmethod
     def from_dict(cls, data: Optional[dict]) -> "LeaseDocumentSnapshot":
          data = data or {}
          known = {f.name for f in fields(cls)}
          return cls(**{k: v for k, v in data.items() if k in known})


class Lease(Base):
     """
     Shared lease row. Never instantiated directly; use StandardLease or CustomLease.
     """
     __tablename__ = "leases"

     id = Column(Integer, primary_key=True, autoincrement=True)
     lease_type = Column(Enum(LeaseType, name="lease_type"), nullable=False, index=True)

     listing_id = Column(Integer, ForeignKey("listings.id"), nullable=True, index=True)
     landlord_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

     status = Column(
          Enum(LeaseStatus, name="lease_status"),
          default=LeaseStatus.DRAFT,
          nullable=False,
          index=True
     )

     # Lease period
     start_date = Column(DateTime, nullable=True)
     end_date = Column(DateTime, nullable=True, index=True)

     # Rent terms
     rent_amount = Column(Numeric(12, 2), nullable=True)
     security_deposit = Column(Numeric(12, 2), nullable=True)
     payment_frequency = Column(String(20), default="MONTHLY", nullable=True)
     notes = Column(Text, nullable=True)

     # Termination
     termination_date = Column(DateTime, nullable=True)
     termination_reason = Column(String(255), nullable=True)
     termination_notes = Column(Text, nullable=True)
     terminated_by = Column(Integer, ForeignKey("users.id"), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     listing = relationship("Listing", back_populates="leases")
     landlord = relationship("User", foreign_keys=[landlord_id])
     tenant = relationship("User", foreign_keys=[tenant_id])

     __mapper_args__ = {
          "polymorphic_on": lease_type,
     }

     def is_past_end(self, now) -> bool:
          return self.end_date is not None and self.end_date < now

     def __repr__(self):
          return (
               f"<{type(self).__name__}(id={self.id}, tenant_id={self.tenant_id}, "
               f"status='{self.status.value if self.status else None}')>"
          )


class StandardLease(Lease):
     """Lease rendered from the fixed-layout legal form."""
     __tablename__ = "standard_leases"

     id = Column(Integer, ForeignKey("leases.id", ondelete="CASCADE"), primary_key=True)
     lease_term_type = Column(String(50), nullable=True)  # FIXED, MONTH_TO_MONTH
     payment_day = Column(Integer, nullable=True)
     document_snapshot = Column(JSON, nullable=True)
     contract_url = Column(String(1000), nullable=True)

     __mapper_args__ = {
          "polymorphic_identity": LeaseType.STANDARD,
     }

     @property
     def snapshot(self) -> LeaseDocumentSnapshot:
          return LeaseDocumentSnapshot.from_dict(self.document_snapshot)


class CustomLease(Lease):
     """Lease backed by a landlord-uploaded document."""
     __tablename__ = "custom_leases"

     id = Column(Integer, ForeignKey("leases.id", ondelete="CASCADE"), primary_key=True)
     lease_name = Column(String(255), nullable=False)
     description = Column(Text, nullable=True)
     property_type = Column(String(50), nullable=True)
     file_url = Column(String(1000), nullable=True)

     __mapper_args__ = {
          "polymorphic_identity": LeaseType.CUSTOM,
     }


LEASE_MODELS = {
     LeaseType.STANDARD: StandardLease,
     LeaseType.CUSTOM: CustomLease,
}
