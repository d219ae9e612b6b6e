# routers/lease_invites.py
"""
Lease invite and signing routes.

Generating an invite requires the landlord's token. Looking an invite up
and signing it are public: the token in the URL is the credential and the
signer identifies themselves in the body.
"""
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_landlord
from models import User
from schemas.invite import (
     InviteCreate,
     InviteLeaseTerms,
     InviteLookupResponse,
     InviteResponse,
     SignLeaseRequest,
     SignLeaseResponse,
)
from schemas.lease import LeaseResponse
from services import invite_service, signing_service
from services.access import CurrentUser
from services.contract_renderer import generate_contract_for_lease
from services.lease_service import lease_to_dict
from utils.email import send_lease_invite_email, send_lease_signed_email

router = APIRouter(prefix="/leases-invite", tags=["lease-invites"])


@router.post(
     "/{lease_id}/invite",
     response_model=InviteResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Generate a signing invite for a lease"
)
def generate_invite(
     lease_id: int,
     data: InviteCreate,
     background_tasks: BackgroundTasks,
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(require_landlord)
):
     """
     Issue a single-use signing link for a DRAFT lease owned by the caller.

     - **lease_type**: `STANDARD` or `CUSTOM`
     - **tenant_id**: optional; when given, the link is emailed to that user
     """
     invite = invite_service.generate_invite(db, lease_id, data.lease_type.value, user.id, data.tenant_id)
     if data.tenant_id:
          tenant = db.get(User, data.tenant_id)
          if tenant is not None:
               background_tasks.add_task(send_lease_invite_email, tenant.email, invite.url, invite.expires_at)
     return InviteResponse.model_validate(invite)


@router.get(
     "/invite/{token}",
     response_model=InviteLookupResponse,
     summary="Look up an invite for the signing page"
)
def get_invite(token: str, db: Session = Depends(get_session)):
     invite, terms = invite_service.get_invite_by_token(db, token)
     return InviteLookupResponse(
          invite=InviteResponse.model_validate(invite),
          lease=InviteLeaseTerms(**terms),
     )


@router.post(
     "/sign/{token}",
     response_model=SignLeaseResponse,
     summary="Sign a lease through its invite"
)
def sign_lease(
     token: str,
     data: SignLeaseRequest,
     background_tasks: BackgroundTasks,
     db: Session = Depends(get_session)
):
     """
     Activate the invite's lease for **user_id** and mark the listing RENTED.

     Fails with `ALREADY_SIGNED`, `EXPIRED`, or `CONFLICT` (with
     `existing_lease_id`) when the signer already holds an active lease.
     """
     invite, lease = signing_service.sign_lease(db, token, data.user_id)

     if signing_service.needs_contract(lease):
          background_tasks.add_task(generate_contract_for_lease, lease.id, data.user_id)
     tenant = db.get(User, data.user_id)
     if tenant is not None:
          listing_title = lease.listing.title if lease.listing else ""
          background_tasks.add_task(send_lease_signed_email, tenant.email, lease.id, listing_title)

     return SignLeaseResponse(
          invite=InviteResponse.model_validate(invite),
          lease=LeaseResponse(**lease_to_dict(lease)),
     )
