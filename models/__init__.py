# models/__init__.py
from .base import Base
from .user import User, UserRole
from .listing import Listing, ListingStatus
from .lease import (
     Lease,
     StandardLease,
     CustomLease,
     LeaseType,
     LeaseStatus,
     LeaseDocumentSnapshot,
     LEASE_MODELS,
)
from .application import Application, ApplicationStatus, EmploymentInfo
from .lease_invite import LeaseInvite
from .maintenance_request import MaintenanceRequest
from .payment import Payment, PaymentType, PaymentStatus
from .invoice import Invoice, InvoiceStatus

__all__ = [
     "Base",
     "User",
     "UserRole",
     "Listing",
     "ListingStatus",
     "Lease",
     "StandardLease",
     "CustomLease",
     "LeaseType",
     "LeaseStatus",
     "LeaseDocumentSnapshot",
     "LEASE_MODELS",
     "Application",
     "ApplicationStatus",
     "EmploymentInfo",
     "LeaseInvite",
     "MaintenanceRequest",
     "Payment",
     "PaymentType",
     "PaymentStatus",
     "Invoice",
     "InvoiceStatus",
]
