# services/invite_service.py
"""
Single-use signing invites for leases.
"""
import logging
import secrets
from datetime import timedelta

from sqlalchemy.orm import Session

import config
from database import atomic
from exceptions import ExpiredError, ForbiddenError, InvalidStateError, NotFoundError, ValidationError
from models import LEASE_MODELS, CustomLease, Lease, LeaseInvite, LeaseStatus, LeaseType, StandardLease
from services.lease_service import refresh_expiration
from utils.dates import utcnow

logger = logging.getLogger(__name__)


def generate_token() -> str:
     return secrets.token_hex(32)


def _lease_model(lease_type) -> type[Lease]:
     try:
          return LEASE_MODELS[LeaseType(lease_type)]
     except ValueError:
          raise ValidationError(f"Unknown lease type: {lease_type}")


def generate_invite(db: Session, lease_id: int, lease_type, landlord_id: int, tenant_id=None) -> LeaseInvite:
     """
     Issue a signing invite for a DRAFT lease owned by ``landlord_id``.

     ``tenant_id`` is only a hint from the caller; the invite is bound to
     whoever signs it.
     """
     model = _lease_model(lease_type)
     lease = db.get(model, lease_id)
     if lease is None:
          raise NotFoundError(f"Lease with ID {lease_id} not found")
     if lease.landlord_id != landlord_id:
          raise ForbiddenError("You do not have permission to invite tenants to this lease")
     refresh_expiration(db, lease)
     if lease.status != LeaseStatus.DRAFT:
          raise InvalidStateError(f"Cannot invite a tenant to a lease with status {lease.status.value}")

     token = generate_token()
     invite = LeaseInvite(
          token=token,
          url=f"{config.CLIENT_URL}/leases-invite/sign/{token}",
          lease_id=lease.id,
          lease_type=lease.lease_type,
          tenant_id=None,
          signed=False,
          expires_at=utcnow() + timedelta(days=config.LEASE_INVITE_TTL_DAYS),
     )
     with atomic(db):
          db.add(invite)
     logger.info(
          "Invite %s generated for lease %s (intended tenant %s)", invite.id, lease.id, tenant_id
     )
     return invite


def resolve_invite_lease(db: Session, invite: LeaseInvite) -> Lease:
     lease = db.get(LEASE_MODELS[invite.lease_type], invite.lease_id)
     if lease is None:
          raise NotFoundError("The lease for this invite no longer exists")
     return lease


def find_invite(db: Session, token: str) -> LeaseInvite:
     invite = db.query(LeaseInvite).filter(LeaseInvite.token == token).first()
     if invite is None:
          raise NotFoundError("Invite not found")
     return invite


def lease_terms(lease: Lease) -> dict:
     """Key terms shown to the prospective tenant before signing."""
     listing = lease.listing
     terms = {
          "lease_id": lease.id,
          "lease_type": lease.lease_type.value,
          "status": lease.status.value,
          "start_date": lease.start_date,
          "end_date": lease.end_date,
          "rent_amount": lease.rent_amount,
          "security_deposit": lease.security_deposit,
          "payment_frequency": lease.payment_frequency,
          "listing_title": listing.title if listing else None,
          "property_address": listing.street_address if listing else None,
          "landlord_name": lease.landlord.full_name if lease.landlord else None,
     }
     if isinstance(lease, StandardLease):
          terms["contract_url"] = lease.contract_url
     elif isinstance(lease, CustomLease):
          terms["lease_name"] = lease.lease_name
          terms["file_url"] = lease.file_url
     return terms


def get_invite_by_token(db: Session, token: str) -> tuple[LeaseInvite, dict]:
     """Read-only lookup backing the public signing page."""
     invite = find_invite(db, token)
     if invite.is_expired(utcnow()):
          raise ExpiredError("This invite has expired")
     lease = refresh_expiration(db, resolve_invite_lease(db, invite))
     return invite, lease_terms(lease)
