# exceptions.py
"""
Domain errors raised by the service layer.

Every error carries a machine-readable ``code``, an HTTP ``status_code`` and
optional structured ``details`` that are merged into the JSON error body.

    LeasingError
    +-- NotFoundError        404
    +-- ForbiddenError       403
    +-- ValidationError      400
    +-- ExpiredError         410
    +-- InvalidStateError    409
    +-- AlreadySignedError   409
    +-- ConflictError        409  (existing_lease_id)
"""
from typing import Any, Optional


class LeasingError(Exception):
     """Base class for all domain errors."""

     code = "LEASING_ERROR"
     status_code = 400

     def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
          super().__init__(message)
          self.message = message
          self.details = details or {}

     def to_dict(self) -> dict[str, Any]:
          return {"error": self.code, "message": self.message, **self.details}


class NotFoundError(LeasingError):
     code = "NOT_FOUND"
     status_code = 404


class ForbiddenError(LeasingError):
     code = "FORBIDDEN"
     status_code = 403


class ValidationError(LeasingError):
     code = "VALIDATION_ERROR"
     status_code = 400


class ExpiredError(LeasingError):
     code = "EXPIRED"
     status_code = 410


class InvalidStateError(LeasingError):
     code = "INVALID_STATE"
     status_code = 409


class AlreadySignedError(LeasingError):
     code = "ALREADY_SIGNED"
     status_code = 409


class ConflictError(LeasingError):
     """The tenant already holds an active lease."""

     code = "CONFLICT"
     status_code = 409

     def __init__(self, message: str, existing_lease_id: int):
          super().__init__(message, {"existing_lease_id": existing_lease_id})
          self.existing_lease_id = existing_lease_id
