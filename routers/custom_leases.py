# routers/custom_leases.py
"""
Custom lease routes - leases backed by a landlord-uploaded document.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user, require_landlord
from models import LeaseStatus, LeaseType
from schemas.lease import (
     CustomLeaseCreate,
     CustomLeaseUpdate,
     LeaseListResponse,
     LeaseResponse,
     LeaseStatusEnum,
     LeaseTerminate,
)
from services import lease_service
from services.access import CurrentUser

router = APIRouter(prefix="/custom-leases", tags=["custom-leases"])


def _response(lease) -> LeaseResponse:
     return LeaseResponse(**lease_service.lease_to_dict(lease))


@router.post(
     "",
     response_model=LeaseResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a custom lease"
)
def create_custom_lease(
     data: CustomLeaseCreate,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     """
     Upload the document through `/uploads/presign` first and pass the
     resulting blob URL as **file_url**.
     """
     return _response(lease_service.create_custom_lease(db, user.id, data))


@router.get(
     "",
     response_model=LeaseListResponse,
     summary="List custom leases visible to the caller"
)
def list_custom_leases(
     status_filter: Optional[LeaseStatusEnum] = Query(None, alias="status", description="Filter by status"),
     listing_id: Optional[int] = Query(None, description="Filter by listing"),
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(get_current_user)
):
     leases = lease_service.list_leases(
          db,
          user,
          lease_type=LeaseType.CUSTOM,
          status=LeaseStatus(status_filter.value) if status_filter else None,
          listing_id=listing_id,
     )
     return LeaseListResponse(leases=[_response(lease) for lease in leases], total=len(leases))


@router.get("/{lease_id}", response_model=LeaseResponse, summary="Get custom lease by ID")
def get_custom_lease(
     lease_id: int,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(get_current_user)
):
     return _response(lease_service.get_lease(db, lease_id, user, LeaseType.CUSTOM))


@router.put("/{lease_id}", response_model=LeaseResponse, summary="Update custom lease")
def update_custom_lease(
     lease_id: int,
     data: CustomLeaseUpdate,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     return _response(lease_service.update_lease(db, LeaseType.CUSTOM, lease_id, user.id, data))


@router.post("/{lease_id}/terminate", response_model=LeaseResponse, summary="Terminate custom lease")
def terminate_custom_lease(
     lease_id: int,
     data: LeaseTerminate,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     return _response(lease_service.terminate_lease(db, LeaseType.CUSTOM, lease_id, user.id, data))


@router.delete("/{lease_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete custom lease")
def delete_custom_lease(
     lease_id: int,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     lease_service.delete_lease(db, LeaseType.CUSTOM, lease_id, user.id)
     return None
