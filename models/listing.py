# models/listing.py
import enum

from sqlalchemy import Column, Integer, String, Numeric, Text, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base


class ListingStatus(str, enum.Enum):
     """Occupancy state of a listing."""
     ACTIVE = "ACTIVE"      # available
     RENTED = "RENTED"      # occupied
     INACTIVE = "INACTIVE"


class Listing(Base):
     """
     Listing model - a rentable property owned by a landlord.
     """
     __tablename__ = "listings"

     id = Column(Integer, primary_key=True, autoincrement=True)
     landlord_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
     title = Column(String(255), nullable=False)
     description = Column(Text, nullable=True)
     category = Column(String(50), nullable=True)  # RESIDENTIAL, COMMERCIAL

     # Address
     street_address = Column(String(255), nullable=True)
     unit_number = Column(String(50), nullable=True)
     city = Column(String(100), nullable=True)
     state = Column(String(100), nullable=True)
     country = Column(String(100), nullable=True)
     zip_code = Column(String(20), nullable=True)

     # Pricing
     rent_amount = Column(Numeric(12, 2), nullable=True)
     security_deposit = Column(Numeric(12, 2), nullable=True)
     rent_cycle = Column(String(20), default="MONTHLY", nullable=False)

     status = Column(
          Enum(ListingStatus, name="listing_status"),
          default=ListingStatus.ACTIVE,
          nullable=False,
          index=True
     )

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     # Relationships
     landlord = relationship("User", back_populates="listings")
     leases = relationship("Lease", back_populates="listing")

     def __repr__(self):
          return f"<Listing(id={self.id}, title='{self.title}', status='{self.status.value}')>"
