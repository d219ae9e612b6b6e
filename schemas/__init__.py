from .application import (
     ApplicationCreate,
     ApplicationSubmit,
     ApplicationStatusUpdate,
     ApplicationResponse,
     ApplicationListResponse,
)
from .lease import (
     StandardLeaseCreate,
     CustomLeaseCreate,
     LeaseResponse,
     LeaseListResponse,
)
from .invite import InviteCreate, InviteResponse, SignLeaseRequest, SignLeaseResponse
from .invoice import (
     InvoiceCreate,
     InvoiceUpdate,
     InvoiceResponse,
     InvoiceListResponse,
)
from .payment import PaymentResponse, PaymentListResponse

__all__ = [
     "ApplicationCreate",
     "ApplicationSubmit",
     "ApplicationStatusUpdate",
     "ApplicationResponse",
     "ApplicationListResponse",
     "StandardLeaseCreate",
     "CustomLeaseCreate",
     "LeaseResponse",
     "LeaseListResponse",
     "InviteCreate",
     "InviteResponse",
     "SignLeaseRequest",
     "SignLeaseResponse",
     "InvoiceCreate",
     "InvoiceUpdate",
     "InvoiceResponse",
     "InvoiceListResponse",
     "PaymentResponse",
     "PaymentListResponse",
]
