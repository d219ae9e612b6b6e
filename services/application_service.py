# services/application_service.py
"""
Application intake and landlord decisions.

A landlord creates an application for one of their listings, usually as a
placeholder whose share URL is handed to the prospective tenant. The
applicant fills it in through the public endpoints. The landlord then
approves, rejects or cancels it; approving an application that carries a
tenant also drafts a standard lease for that tenant in the same
transaction.
"""
import logging
import secrets
from typing import Optional

from sqlalchemy.orm import Session

import config
from database import atomic
from exceptions import ForbiddenError, InvalidStateError, NotFoundError
from models import (
     Application,
     ApplicationStatus,
     EmploymentInfo,
     LeaseStatus,
     StandardLease,
)
from models.application import PLACEHOLDER_EMAIL, PLACEHOLDER_NAME
from schemas.application import (
     ApplicationCreate,
     ApplicationStatusUpdate,
     ApplicationSubmit,
)
from services.access import get_owned_listing, get_user_or_404
from services.lease_service import build_document_snapshot
from utils.dates import one_year_after, utcnow

logger = logging.getLogger(__name__)

APPLICANT_FIELDS = (
     "phone",
     "date_of_birth",
     "monthly_income",
     "current_address",
     "move_in_date",
     "occupants",
     "pets",
     "documents",
     "references",
     "message",
)


def generate_public_id() -> str:
     return secrets.token_urlsafe(16)


def share_url(application: Application) -> str:
     return f"{config.CLIENT_URL}/applications/apply/{application.public_id}"


def _employment_to_dict(info: EmploymentInfo) -> dict:
     return {
          "id": info.id,
          "employer_name": info.employer_name,
          "job_title": info.job_title,
          "income": info.income,
          "duration": info.duration,
          "address": info.address,
          "proof_document": info.proof_document,
     }


def application_to_dict(application: Application) -> dict:
     """Response payload including the derived placeholder flag and share URL."""
     return {
          "id": application.id,
          "public_id": application.public_id,
          "listing_id": application.listing_id,
          "landlord_id": application.landlord_id,
          "tenant_id": application.tenant_id,
          "full_name": application.full_name,
          "email": application.email,
          "phone": application.phone,
          "date_of_birth": application.date_of_birth,
          "monthly_income": application.monthly_income,
          "current_address": application.current_address,
          "move_in_date": application.move_in_date,
          "occupants": application.occupants,
          "pets": application.pets,
          "documents": application.documents,
          "references": application.references,
          "message": application.message,
          "status": application.status.value,
          "expiration_date": application.expiration_date,
          "reviewed_by": application.reviewed_by,
          "reviewed_at": application.reviewed_at,
          "decision_notes": application.decision_notes,
          "lease_id": application.lease_id,
          "is_placeholder": application.is_placeholder,
          "share_url": share_url(application),
          "employment_info": [_employment_to_dict(e) for e in application.employment_info],
          "created_at": application.created_at,
     }


def _apply_applicant_fields(application: Application, data) -> None:
     for field in APPLICANT_FIELDS:
          value = getattr(data, field)
          if value is not None:
               setattr(application, field, value)
     if data.employment_info:
          application.employment_info = [
               EmploymentInfo(**item.model_dump()) for item in data.employment_info
          ]


def create_application(db: Session, landlord_id: int, data: ApplicationCreate) -> Application:
     listing = get_owned_listing(db, data.listing_id, landlord_id)
     if data.tenant_id:
          get_user_or_404(db, data.tenant_id)

     application = Application(
          public_id=generate_public_id(),
          listing_id=listing.id,
          landlord_id=landlord_id,
          tenant_id=data.tenant_id,
          full_name=data.full_name or PLACEHOLDER_NAME,
          email=data.email or PLACEHOLDER_EMAIL,
          status=ApplicationStatus.NEW,
          expiration_date=data.expiration_date,
     )
     _apply_applicant_fields(application, data)

     with atomic(db):
          db.add(application)
     logger.info(
          "Application %s created for listing %s (placeholder=%s)",
          application.id, listing.id, application.is_placeholder,
     )
     return application


def get_application_by_public_id(db: Session, public_id: str) -> Application:
     application = db.query(Application).filter(Application.public_id == public_id).first()
     if application is None:
          raise NotFoundError("Application not found")
     if application.is_expired(utcnow()):
          raise ForbiddenError("This application link has expired")
     return application


def submit_public_application(db: Session, public_id: str, data: ApplicationSubmit) -> Application:
     """Fill in a placeholder application from its public link."""
     application = get_application_by_public_id(db, public_id)
     if not application.is_placeholder or application.status != ApplicationStatus.NEW:
          raise InvalidStateError("This application has already been submitted")
     if data.tenant_id:
          get_user_or_404(db, data.tenant_id)

     with atomic(db):
          application.full_name = data.full_name
          application.email = data.email
          application.tenant_id = data.tenant_id
          application.status = ApplicationStatus.NEW
          _apply_applicant_fields(application, data)
     logger.info("Application %s submitted by applicant", application.id)
     return application


def list_applications(
     db: Session,
     landlord_id: int,
     status: Optional[ApplicationStatus] = None,
     listing_id: Optional[int] = None,
     page: int = 1,
     page_size: int = 10,
) -> tuple[list[Application], int]:
     query = db.query(Application).filter(Application.landlord_id == landlord_id)
     if status is not None:
          query = query.filter(Application.status == status)
     if listing_id is not None:
          query = query.filter(Application.listing_id == listing_id)

     total = query.count()
     applications = (
          query.order_by(Application.created_at.desc(), Application.id.desc())
          .offset((page - 1) * page_size)
          .limit(page_size)
          .all()
     )
     return applications, total


def get_application(db: Session, application_id: int, landlord_id: int) -> Application:
     application = db.get(Application, application_id)
     if application is None:
          raise NotFoundError(f"Application with ID {application_id} not found")
     if application.landlord_id != landlord_id:
          raise ForbiddenError("You do not have permission to access this application")
     return application


def _draft_lease_for(db: Session, application: Application) -> StandardLease:
     listing = application.listing
     landlord = get_user_or_404(db, application.landlord_id)
     start = application.move_in_date or utcnow()
     snapshot = build_document_snapshot(
          landlord,
          listing,
          tenant=application.tenant,
          tenant_full_name=application.full_name,
          tenant_email=application.email,
          tenant_phone=application.phone,
     )
     lease = StandardLease(
          listing_id=listing.id,
          landlord_id=application.landlord_id,
          tenant_id=application.tenant_id,
          status=LeaseStatus.DRAFT,
          start_date=start,
          end_date=one_year_after(start),
          rent_amount=listing.rent_amount,
          security_deposit=listing.security_deposit or 0,
          payment_frequency=listing.rent_cycle or "MONTHLY",
          notes=f"Auto-generated from application {application.public_id}",
          document_snapshot=snapshot.to_dict(),
     )
     db.add(lease)
     db.flush()
     return lease


def update_application_status(
     db: Session,
     application_id: int,
     landlord_id: int,
     data: ApplicationStatusUpdate,
) -> tuple[Application, Optional[StandardLease]]:
     """
     Record the landlord's decision on a NEW application.

     The status change and, for an approval with a known tenant, the
     drafted lease commit together or not at all.
     """
     application = get_application(db, application_id, landlord_id)
     if application.status != ApplicationStatus.NEW:
          raise InvalidStateError(
               f"Application has already been {application.status.value.lower()}"
          )

     new_status = ApplicationStatus(data.status.value)
     lease = None
     with atomic(db):
          # Only one decision can win on the same application
          updated = (
               db.query(Application)
               .filter(Application.id == application.id, Application.status == ApplicationStatus.NEW)
               .update(
                    {
                         Application.status: new_status,
                         Application.reviewed_by: landlord_id,
                         Application.reviewed_at: utcnow(),
                         Application.decision_notes: data.decision_notes,
                    },
                    synchronize_session="fetch",
               )
          )
          if updated != 1:
               raise InvalidStateError("Application has already been decided")

          if new_status == ApplicationStatus.APPROVED and application.tenant_id:
               lease = _draft_lease_for(db, application)
               application.lease_id = lease.id

     logger.info(
          "Application %s %s by landlord %s%s",
          application.id,
          new_status.value,
          landlord_id,
          f" (lease {lease.id})" if lease else "",
     )
     return application, lease


def _holds_lease(application: Application) -> bool:
     return application.status == ApplicationStatus.APPROVED and application.lease_id is not None


def delete_application(db: Session, application_id: int, landlord_id: int) -> None:
     application = get_application(db, application_id, landlord_id)
     if _holds_lease(application):
          raise InvalidStateError("Cannot delete an application that produced a lease")
     with atomic(db):
          db.delete(application)
     logger.info("Application %s deleted", application_id)


def bulk_delete_applications(db: Session, ids: list[int], landlord_id: int) -> int:
     """Delete every listed application or none of them."""
     unique_ids = sorted(set(ids))
     applications = db.query(Application).filter(Application.id.in_(unique_ids)).all()

     found = {a.id for a in applications}
     missing = [i for i in unique_ids if i not in found]
     if missing:
          raise NotFoundError(f"Applications not found: {missing}", {"missing_ids": missing})
     if any(a.landlord_id != landlord_id for a in applications):
          raise ForbiddenError("You do not have permission to delete some of these applications")
     if any(_holds_lease(a) for a in applications):
          raise InvalidStateError("Cannot delete applications that produced a lease")

     with atomic(db):
          for application in applications:
               db.delete(application)
     logger.info("Bulk deleted %s applications for landlord %s", len(applications), landlord_id)
     return len(applications)
