# models/user.py
import enum

from sqlalchemy import Column, Integer, String, DateTime, Enum, func
from sqlalchemy.orm import relationship
from .base import Base


class UserRole(str, enum.Enum):
     """Roles issued by the auth service."""
     LANDLORD = "LANDLORD"
     TENANT = "TENANT"
     ADMIN = "ADMIN"


class User(Base):
     """
     User model - landlords and tenants.
     Authentication lives elsewhere; this row only holds contact data
     needed for leases, applications and contract rendering.
     """
     __tablename__ = "users"

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     first_name = Column(String(100), nullable=False)
     last_name = Column(String(100), nullable=False)
     phone = Column(String(50), nullable=True)
     address = Column(String(500), nullable=True)
     role = Column(Enum(UserRole, name="user_role"), nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     listings = relationship("Listing", back_populates="landlord")

     @property
     def full_name(self) -> str:
          return f"{self.first_name} {self.last_name}".strip()

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', role='{self.role.value}')>"
