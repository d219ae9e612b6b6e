from . import applications, custom_leases, invoices, lease_invites, leases, payments, uploads

ROUTERS = [
     applications.router,
     leases.router,
     custom_leases.router,
     lease_invites.router,
     invoices.router,
     payments.router,
     uploads.router,
]

__all__ = ["ROUTERS"]
