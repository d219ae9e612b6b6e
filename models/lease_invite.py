# models/lease_invite.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base
from .lease import LeaseType


class LeaseInvite(Base):
     """
     Single-use signing token for one lease.

     ``tenant_id`` stays empty until the invite is signed; ``signed`` only
     ever moves from False to True.
     """
     __tablename__ = "lease_invites"

     id = Column(Integer, primary_key=True, autoincrement=True)
     token = Column(String(64), nullable=False, unique=True, index=True)
     url = Column(String(1000), nullable=False)
     lease_id = Column(Integer, ForeignKey("leases.id", ondelete="CASCADE"), nullable=False, index=True)
     lease_type = Column(Enum(LeaseType, name="lease_type"), nullable=False)
     tenant_id = Column(Integer, ForeignKey("users.id"), nullable=True)
     signed = Column(Boolean, default=False, nullable=False)
     signed_at = Column(DateTime, nullable=True)
     expires_at = Column(DateTime, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     lease = relationship("Lease")

     def is_expired(self, now) -> bool:
          return now > self.expires_at

     def __repr__(self):
          return f"<LeaseInvite(id={self.id}, lease_id={self.lease_id}, signed={self.signed})>"
