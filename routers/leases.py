# routers/leases.py
"""
Standard lease routes, plus the cross-variant lease listing.

Role-based access:
- Landlord: creates, updates, terminates and deletes leases they own
- Tenant: can read leases bound to them
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user, require_landlord
from models import LeaseStatus, LeaseType
from schemas.lease import (
     LeaseListResponse,
     LeaseResponse,
     LeaseStatusEnum,
     LeaseTerminate,
     LeaseTypeEnum,
     StandardLeaseCreate,
     StandardLeaseUpdate,
)
from services import lease_service
from services.access import CurrentUser

router = APIRouter(prefix="/leases", tags=["leases"])


def _response(lease) -> LeaseResponse:
     return LeaseResponse(**lease_service.lease_to_dict(lease))


@router.post(
     "",
     response_model=LeaseResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a standard lease"
)
def create_lease(
     data: StandardLeaseCreate,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     """
     Create a DRAFT standard lease on one of the caller's listings.

     Landlord, tenant and property details are frozen into the lease's
     document snapshot at this point.
     """
     return _response(lease_service.create_standard_lease(db, user.id, data))


@router.get(
     "",
     response_model=LeaseListResponse,
     summary="List leases visible to the caller"
)
def list_leases(
     lease_type: Optional[LeaseTypeEnum] = Query(None, description="Restrict to one lease variant"),
     status_filter: Optional[LeaseStatusEnum] = Query(None, alias="status", description="Filter by status"),
     listing_id: Optional[int] = Query(None, description="Filter by listing"),
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(get_current_user)
):
     """
     **Role-based access:**
     - **Landlord**: leases they own.
     - **Tenant**: leases bound to them.

     Leases past their end date are reported as EXPIRED.
     """
     leases = lease_service.list_leases(
          db,
          user,
          lease_type=LeaseType(lease_type.value) if lease_type else None,
          status=LeaseStatus(status_filter.value) if status_filter else None,
          listing_id=listing_id,
     )
     return LeaseListResponse(leases=[_response(lease) for lease in leases], total=len(leases))


@router.get(
     "/{lease_id}",
     response_model=LeaseResponse,
     summary="Get standard lease by ID"
)
def get_lease(
     lease_id: int,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(get_current_user)
):
     return _response(lease_service.get_lease(db, lease_id, user, LeaseType.STANDARD))


@router.put(
     "/{lease_id}",
     response_model=LeaseResponse,
     summary="Update standard lease"
)
def update_lease(
     lease_id: int,
     data: StandardLeaseUpdate,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     """
     Only **end_date**, **rent_amount**, **payment_frequency** and **notes**
     can change. Expired and terminated leases are read-only.
     """
     return _response(lease_service.update_lease(db, LeaseType.STANDARD, lease_id, user.id, data))


@router.post(
     "/{lease_id}/terminate",
     response_model=LeaseResponse,
     summary="Terminate standard lease"
)
def terminate_lease(
     lease_id: int,
     data: LeaseTerminate,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     return _response(lease_service.terminate_lease(db, LeaseType.STANDARD, lease_id, user.id, data))


@router.delete(
     "/{lease_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete standard lease"
)
def delete_lease(
     lease_id: int,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     """
     Active leases cannot be deleted; terminate them first.
     """
     lease_service.delete_lease(db, LeaseType.STANDARD, lease_id, user.id)
     return None
