# models/application.py
import enum

from sqlalchemy import (
     Column, Integer, String, Numeric, Text, DateTime, ForeignKey, Enum, JSON, func
)
from sqlalchemy.orm import relationship
from .base import Base

# Sentinel applicant fields of a landlord-generated application link
PLACEHOLDER_NAME = "N/A"
PLACEHOLDER_EMAIL = "na@example.com"


class ApplicationStatus(str, enum.Enum):
     """Decision state of a rental application. Only NEW is non-terminal."""
     NEW = "NEW"
     APPROVED = "APPROVED"
     REJECTED = "REJECTED"
     CANCELLED = "CANCELLED"


class Application(Base):
     """
     Rental application for a listing.

     Reachable publicly through ``public_id``. A placeholder application has
     sentinel name/email and no tenant until the applicant fills it in.
     """
     __tablename__ = "applications"

     id = Column(Integer, primary_key=True, autoincrement=True)
     public_id = Column(String(64), nullable=False, unique=True, index=True)
     listing_id = Column(Integer, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False, index=True)
     landlord_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

     # Applicant data
     full_name = Column(String(200), nullable=False, default=PLACEHOLDER_NAME)
     email = Column(String(255), nullable=False, default=PLACEHOLDER_EMAIL)
     phone = Column(String(50), nullable=True)
     date_of_birth = Column(DateTime, nullable=True)
     monthly_income = Column(Numeric(12, 2), nullable=True)
     current_address = Column(String(500), nullable=True)
     move_in_date = Column(DateTime, nullable=True)
     occupants = Column(JSON, nullable=True)
     pets = Column(JSON, nullable=True)
     documents = Column(JSON, nullable=True)
     references = Column(JSON, nullable=True)
     message = Column(Text, nullable=True)

     status = Column(
          Enum(ApplicationStatus, name="application_status"),
          default=ApplicationStatus.NEW,
          nullable=False,
          index=True
     )
     expiration_date = Column(DateTime, nullable=True)

     # Decision
     reviewed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
     reviewed_at = Column(DateTime, nullable=True)
     decision_notes = Column(Text, nullable=True)
     lease_id = Column(Integer, ForeignKey("leases.id"), nullable=True, unique=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     listing = relationship("Listing")
     landlord = relationship("User", foreign_keys=[landlord_id])
     tenant = relationship("User", foreign_keys=[tenant_id])
     lease = relationship("Lease", foreign_keys=[lease_id])
     employment_info = relationship(
          "EmploymentInfo",
          back_populates="application",
          cascade="all, delete-orphan",
          order_by="EmploymentInfo.id",
     )

     @property
     def is_placeholder(self) -> bool:
          return (
               self.tenant_id is None
               and self.full_name == PLACEHOLDER_NAME
               and self.email == PLACEHOLDER_EMAIL
          )

     def is_expired(self, now) -> bool:
          return self.expiration_date is not None and now > self.expiration_date

     def __repr__(self):
          return f"<Application(id={self.id}, public_id='{self.public_id}', status='{self.status.value}')>"


class EmploymentInfo(Base):
     """Employment history rows attached to an application."""
     __tablename__ = "employment_info"

     id = Column(Integer, primary_key=True, autoincrement=True)
     application_id = Column(
          Integer,
          ForeignKey("applications.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     employer_name = Column(String(255), nullable=False)
     job_title = Column(String(255), nullable=True)
     income = Column(Numeric(12, 2), nullable=True)
     duration = Column(String(100), nullable=True)
     address = Column(String(500), nullable=True)
     proof_document = Column(String(1000), nullable=True)

     application = relationship("Application", back_populates="employment_info")

     def __repr__(self):
          return f"<EmploymentInfo(id={self.id}, employer='{self.employer_name}')>"
