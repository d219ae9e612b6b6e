from .invoice_service import InvoiceService
from .payment_service import PaymentService
from .lease_service import sweep_expired_leases

__all__ = [
     "InvoiceService",
     "PaymentService",
     "sweep_expired_leases",
]
