# services/signing_service.py
"""
Lease signing: consume an invite and activate its lease.

Preconditions are checked up front so the common failures leave no trace.
The writes (invite, lease, listing) then run as one transaction in which
the invite's ``signed = false`` and the lease's ``status = DRAFT`` are
re-checked by conditional UPDATEs, so two concurrent signers cannot both
succeed and no partial activation is ever committed. The signer's user row
is locked before the active-lease re-check, so one tenant signing two
invites at once ends up with at most one ACTIVE lease.
"""
import logging

from sqlalchemy.orm import Session

from database import atomic
from exceptions import AlreadySignedError, ConflictError, ExpiredError, InvalidStateError
from models import Lease, LeaseInvite, LeaseStatus, Listing, ListingStatus, StandardLease, User
from services.access import get_user_or_404
from services.invite_service import find_invite, resolve_invite_lease
from services.lease_service import find_active_lease_for_tenant
from utils.dates import utcnow

logger = logging.getLogger(__name__)


def _raise_conflict(existing: Lease):
     raise ConflictError(
          "You already have an active lease. Terminate or wait for it to expire before signing another.",
          existing_lease_id=existing.id,
     )


def _lock_signer(db: Session, user_id: int) -> User:
     """Row lock on the signer so their concurrent signings run one at a time."""
     return db.query(User).filter(User.id == user_id).with_for_update().one()


def sign_lease(db: Session, token: str, user_id: int) -> tuple[LeaseInvite, Lease]:
     invite = find_invite(db, token)
     now = utcnow()
     if invite.is_expired(now):
          raise ExpiredError("This invite has expired")
     if invite.signed:
          raise AlreadySignedError("This lease has already been signed")

     get_user_or_404(db, user_id)

     existing = find_active_lease_for_tenant(db, user_id, now)
     if existing is not None:
          _raise_conflict(existing)

     lease = resolve_invite_lease(db, invite)
     if lease.status != LeaseStatus.DRAFT:
          raise InvalidStateError(f"Cannot sign a lease with status {lease.status.value}")

     with atomic(db):
          claimed = (
               db.query(LeaseInvite)
               .filter(LeaseInvite.id == invite.id, LeaseInvite.signed == False)  # noqa: E712
               .update(
                    {
                         LeaseInvite.signed: True,
                         LeaseInvite.tenant_id: user_id,
                         LeaseInvite.signed_at: now,
                    },
                    synchronize_session="fetch",
               )
          )
          if claimed != 1:
               raise AlreadySignedError("This lease has already been signed")

          _lock_signer(db, user_id)
          existing = find_active_lease_for_tenant(db, user_id, now, exclude_lease_id=lease.id)
          if existing is not None:
               _raise_conflict(existing)

          activated = (
               db.query(Lease)
               .filter(Lease.id == lease.id, Lease.status == LeaseStatus.DRAFT)
               .update(
                    {Lease.tenant_id: user_id, Lease.status: LeaseStatus.ACTIVE},
                    synchronize_session="fetch",
               )
          )
          if activated != 1:
               raise InvalidStateError("Lease is no longer awaiting signature")

          if lease.listing_id is not None:
               db.query(Listing).filter(Listing.id == lease.listing_id).update(
                    {Listing.status: ListingStatus.RENTED}, synchronize_session="fetch"
               )

     db.refresh(invite)
     db.refresh(lease)
     logger.info("Lease %s signed by user %s via invite %s", lease.id, user_id, invite.id)
     return invite, lease


def needs_contract(lease: Lease) -> bool:
     return isinstance(lease, StandardLease) and not lease.contract_url
