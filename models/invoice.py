# models/invoice.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, Text, Boolean, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base


class InvoiceStatus(str, enum.Enum):
     """Enumeration for invoice status."""
     PENDING = "PENDING"
     SENT = "SENT"
     PAID = "PAID"
     OVERDUE = "OVERDUE"
     CANCELLED = "CANCELLED"


class Invoice(Base):
     """
     Invoice model - maintenance costs billed to the tenant of a listing.

     Every invoice owns exactly one companion Payment (``payment_id``); the
     two rows are created, status-synced and deleted together.
     ``shared_with_tenant`` decides whether the tenant sees that payment.
     """
     __tablename__ = "invoices"

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Foreign keys
     maintenance_request_id = Column(
          Integer,
          ForeignKey("maintenance_requests.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     payment_id = Column(
          Integer,
          ForeignKey("payments.id"),
          nullable=False,
          unique=True
     )
     created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)

     # Invoice details
     description = Column(Text, nullable=False)
     amount = Column(Numeric(12, 2), nullable=False)
     status = Column(
          Enum(InvoiceStatus, name="invoice_status", create_constraint=True),
          default=InvoiceStatus.PENDING,
          nullable=False,
          index=True
     )
     shared_with_tenant = Column(Boolean, default=True, nullable=False)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     maintenance_request = relationship("MaintenanceRequest", back_populates="invoices")
     payment = relationship("Payment", back_populates="invoice")

     def __repr__(self):
          return f"<Invoice(id={self.id}, amount={self.amount}, status='{self.status.value}')>"
