# routers/applications.py
"""
Rental application routes.

Landlords create, list, decide and delete applications. Applicants reach
their application through the unauthenticated ``/applications/public``
routes using the unguessable public id.
"""
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_landlord
from models import ApplicationStatus
from schemas.application import (
     ApplicationBulkDelete,
     ApplicationCreate,
     ApplicationDecisionResponse,
     ApplicationListResponse,
     ApplicationResponse,
     ApplicationStatusEnum,
     ApplicationStatusUpdate,
     ApplicationSubmit,
     LandlordContact,
     PublicApplicationResponse,
     PublicListingSummary,
)
from schemas.lease import LeaseResponse
from services import application_service
from services.access import CurrentUser
from services.lease_service import lease_to_dict
from utils.email import send_application_decision_email, send_application_submitted_email

router = APIRouter(prefix="/applications", tags=["applications"])


def _response(application) -> ApplicationResponse:
     return ApplicationResponse(**application_service.application_to_dict(application))


@router.post(
     "",
     response_model=ApplicationResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create an application or a shareable placeholder link"
)
def create_application(
     data: ApplicationCreate,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     """
     Create an application for one of the caller's listings.

     Omit **full_name** and **email** to get a placeholder whose
     **share_url** the applicant can fill in.
     """
     application = application_service.create_application(db, user.id, data)
     return _response(application)


@router.get(
     "",
     response_model=ApplicationListResponse,
     summary="List the caller's applications"
)
def list_applications(
     status_filter: Optional[ApplicationStatusEnum] = Query(None, alias="status", description="Filter by status"),
     listing_id: Optional[int] = Query(None, description="Filter by listing"),
     page: int = Query(1, ge=1, description="Page number"),
     page_size: int = Query(10, ge=1, le=100, description="Items per page"),
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     applications, total = application_service.list_applications(
          db,
          user.id,
          status=ApplicationStatus(status_filter.value) if status_filter else None,
          listing_id=listing_id,
          page=page,
          page_size=page_size,
     )
     return ApplicationListResponse(
          applications=[_response(a) for a in applications],
          total=total,
          page=page,
          page_size=page_size
     )


@router.get(
     "/public/{public_id}",
     response_model=PublicApplicationResponse,
     summary="Fetch an application by its public link"
)
def get_public_application(public_id: str, db: Session = Depends(get_session)):
     application = application_service.get_application_by_public_id(db, public_id)
     return PublicApplicationResponse(
          application=_response(application),
          listing=PublicListingSummary.model_validate(application.listing),
          landlord=LandlordContact.model_validate(application.landlord),
     )


@router.put(
     "/public/{public_id}",
     response_model=ApplicationResponse,
     summary="Submit an application from its public link"
)
def submit_public_application(
     public_id: str,
     data: ApplicationSubmit,
     background_tasks: BackgroundTasks,
     db: Session = Depends(get_session)
):
     application = application_service.submit_public_application(db, public_id, data)
     background_tasks.add_task(
          send_application_submitted_email,
          application.landlord.email,
          application.full_name,
          application.listing.title,
     )
     return _response(application)


@router.post(
     "/bulk-delete",
     summary="Delete several applications at once"
)
def bulk_delete_applications(
     data: ApplicationBulkDelete,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     """
     Deletes every listed application or none of them.
     """
     deleted = application_service.bulk_delete_applications(db, data.ids, user.id)
     return {"deleted": deleted}


@router.get(
     "/{application_id}",
     response_model=ApplicationResponse,
     summary="Get application by ID"
)
def get_application(
     application_id: int,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     return _response(application_service.get_application(db, application_id, user.id))


@router.patch(
     "/{application_id}/status",
     response_model=ApplicationDecisionResponse,
     summary="Approve, reject or cancel an application"
)
def update_application_status(
     application_id: int,
     data: ApplicationStatusUpdate,
     background_tasks: BackgroundTasks,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     """
     Decide a NEW application.

     Approving an application bound to a tenant also creates a DRAFT
     standard lease for that tenant, returned as **lease**.
     """
     application, lease = application_service.update_application_status(db, application_id, user.id, data)
     if not application.is_placeholder:
          background_tasks.add_task(
               send_application_decision_email,
               application.email,
               application.full_name,
               application.listing.title,
               application.status.value,
          )
     return ApplicationDecisionResponse(
          application=_response(application),
          lease=LeaseResponse(**lease_to_dict(lease)) if lease else None,
     )


@router.delete(
     "/{application_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete application"
)
def delete_application(
     application_id: int,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     application_service.delete_application(db, application_id, user.id)
     return None
