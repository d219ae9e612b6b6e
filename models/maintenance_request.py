# models/maintenance_request.py
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class MaintenanceRequest(Base):
     """Maintenance request raised against a listing; invoices bill its costs."""
     __tablename__ = "maintenance_requests"

     id = Column(Integer, primary_key=True, autoincrement=True)
     listing_id = Column(Integer, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False, index=True)
     user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     title = Column(String(255), nullable=False)
     description = Column(Text, nullable=True)
     status = Column(String(50), default="PENDING", nullable=False)  # PENDING, IN_PROGRESS, COMPLETED
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     listing = relationship("Listing")
     invoices = relationship("Invoice", back_populates="maintenance_request")

     def __repr__(self):
          return f"<MaintenanceRequest(id={self.id}, listing_id={self.listing_id}, status='{self.status}')>"
