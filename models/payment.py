# models/payment.py
import enum

from sqlalchemy import Column, Integer, Numeric, Text, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base


class PaymentType(str, enum.Enum):
     RENT = "RENT"
     DEPOSIT = "DEPOSIT"
     MAINTENANCE = "MAINTENANCE"
     OTHER = "OTHER"


class PaymentStatus(str, enum.Enum):
     PENDING = "PENDING"
     PAID = "PAID"
     CANCELLED = "CANCELLED"


class Payment(Base):
     """
     Payment record owed by a tenant to a landlord.

     Maintenance payments are always created alongside an Invoice and are
     only visible to the tenant when that invoice is shared.
     """
     __tablename__ = "payments"

     id = Column(Integer, primary_key=True, autoincrement=True)
     type = Column(Enum(PaymentType, name="payment_type"), nullable=False, index=True)
     amount = Column(Numeric(12, 2), nullable=False)
     status = Column(
          Enum(PaymentStatus, name="payment_status"),
          default=PaymentStatus.PENDING,
          nullable=False,
          index=True
     )
     due_date = Column(DateTime, nullable=True)
     paid_date = Column(DateTime, nullable=True)

     landlord_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
     lease_id = Column(Integer, ForeignKey("leases.id"), nullable=True, index=True)
     notes = Column(Text, nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     invoice = relationship("Invoice", back_populates="payment", uselist=False)
     lease = relationship("Lease")

     def __repr__(self):
          return f"<Payment(id={self.id}, type='{self.type.value}', amount={self.amount}, status='{self.status.value}')>"
