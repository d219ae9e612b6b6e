# services/lease_service.py
"""
Lease registry - one lifecycle for standard and custom leases.

Status moves DRAFT -> ACTIVE (signing, see signing_service) and
ACTIVE -> EXPIRED (end date passed) or -> TERMINATED (explicit action).

Expiration is applied lazily: every read first flips ACTIVE leases whose
end date has passed to EXPIRED in its own short transaction, so readers
never see a stale ACTIVE lease whether or not a sweep has run.
"""
import logging
from datetime import datetime
from typing import Optional, Union

from sqlalchemy import or_
from sqlalchemy.orm import Session

from database import atomic
from exceptions import ForbiddenError, InvalidStateError, NotFoundError
from models import (
     LEASE_MODELS,
     Application,
     CustomLease,
     Lease,
     LeaseDocumentSnapshot,
     LeaseInvite,
     LeaseStatus,
     LeaseType,
     Listing,
     Payment,
     StandardLease,
     User,
)
from schemas.lease import (
     CustomLeaseCreate,
     CustomLeaseUpdate,
     LeaseTerminate,
     StandardLeaseCreate,
     StandardLeaseUpdate,
)
from services.access import CurrentUser, get_owned_listing, get_user_or_404
from utils.dates import utcnow

logger = logging.getLogger(__name__)

# Leases in these states can no longer be edited
CLOSED_STATUSES = (LeaseStatus.EXPIRED, LeaseStatus.TERMINATED)


# ---------------------------------------------------------------------------
# Expiration
# ---------------------------------------------------------------------------

def expire_overdue_leases(db: Session, *criteria, now: Optional[datetime] = None) -> int:
     """
     Flip ACTIVE leases past their end date to EXPIRED and commit.

     ``criteria`` narrows the sweep to the rows about to be read. Idempotent:
     a lease already EXPIRED is not matched again.
     """
     now = now or utcnow()
     count = (
          db.query(Lease)
          .filter(
               Lease.status == LeaseStatus.ACTIVE,
               Lease.end_date.is_not(None),
               Lease.end_date < now,
               *criteria,
          )
          .update({Lease.status: LeaseStatus.EXPIRED}, synchronize_session="fetch")
     )
     db.commit()
     if count:
          logger.info("Expired %s lease(s) past their end date", count)
     return count


def refresh_expiration(db: Session, lease: Lease, now: Optional[datetime] = None) -> Lease:
     """Check-and-flip a single lease already loaded by the caller."""
     now = now or utcnow()
     if lease.status == LeaseStatus.ACTIVE and lease.is_past_end(now):
          expire_overdue_leases(db, Lease.id == lease.id, now=now)
          lease.status = LeaseStatus.EXPIRED
     return lease


def sweep_expired_leases(db: Session) -> int:
     """Expire every overdue lease. Safe to run from a periodic job."""
     return expire_overdue_leases(db)


def find_active_lease_for_tenant(
     db: Session,
     tenant_id: int,
     now: Optional[datetime] = None,
     exclude_lease_id: Optional[int] = None,
) -> Optional[Lease]:
     """Return the tenant's current ACTIVE lease of either variant, if any."""
     now = now or utcnow()
     query = db.query(Lease).filter(
          Lease.tenant_id == tenant_id,
          Lease.status == LeaseStatus.ACTIVE,
          or_(Lease.end_date.is_(None), Lease.end_date >= now),
     )
     if exclude_lease_id is not None:
          query = query.filter(Lease.id != exclude_lease_id)
     return query.order_by(Lease.id).first()


def find_active_lease_for_listing(db: Session, listing_id: int, now: Optional[datetime] = None) -> Optional[Lease]:
     now = now or utcnow()
     return (
          db.query(Lease)
          .filter(
               Lease.listing_id == listing_id,
               Lease.status == LeaseStatus.ACTIVE,
               or_(Lease.end_date.is_(None), Lease.end_date >= now),
          )
          .order_by(Lease.start_date.desc(), Lease.id.desc())
          .first()
     )


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

def build_document_snapshot(
     landlord: User,
     listing: Listing,
     tenant: Optional[User] = None,
     tenant_full_name: Optional[str] = None,
     tenant_email: Optional[str] = None,
     tenant_phone: Optional[str] = None,
     **overrides,
) -> LeaseDocumentSnapshot:
     """Freeze the parties and property as they stand right now."""
     values = {
          "landlord_full_name": landlord.full_name,
          "landlord_email": landlord.email,
          "landlord_phone": landlord.phone,
          "landlord_address": landlord.address,
          "tenant_full_name": tenant_full_name or (tenant.full_name if tenant else None),
          "tenant_email": tenant_email or (tenant.email if tenant else None),
          "tenant_phone": tenant_phone or (tenant.phone if tenant else None),
          "property_address": listing.street_address,
          "unit_number": listing.unit_number,
          "property_city": listing.city,
          "property_state": listing.state,
          "property_country": listing.country,
          "property_zip_code": listing.zip_code,
          "property_category": listing.category,
     }
     values.update({k: v for k, v in overrides.items() if v is not None})
     return LeaseDocumentSnapshot(**values)


def create_standard_lease(db: Session, landlord_id: int, data: StandardLeaseCreate) -> StandardLease:
     listing = get_owned_listing(db, data.listing_id, landlord_id)
     landlord = get_user_or_404(db, landlord_id)
     tenant = get_user_or_404(db, data.tenant_id) if data.tenant_id else None

     snapshot = build_document_snapshot(
          landlord,
          listing,
          tenant=tenant,
          tenant_full_name=data.tenant_full_name,
          tenant_email=data.tenant_email,
          tenant_phone=data.tenant_phone,
          landlord_full_name=data.landlord_full_name,
          landlord_email=data.landlord_email,
          landlord_phone=data.landlord_phone,
          landlord_address=data.landlord_address,
     )

     lease = StandardLease(
          listing_id=listing.id,
          landlord_id=landlord_id,
          tenant_id=data.tenant_id,
          status=LeaseStatus.DRAFT,
          start_date=data.start_date,
          end_date=data.end_date,
          rent_amount=data.rent_amount,
          security_deposit=data.security_deposit,
          payment_frequency=data.payment_frequency,
          lease_term_type=data.lease_term_type,
          payment_day=data.payment_day,
          notes=data.notes,
          document_snapshot=snapshot.to_dict(),
     )
     with atomic(db):
          db.add(lease)
     logger.info("Standard lease %s created for listing %s", lease.id, listing.id)
     return lease


def create_custom_lease(db: Session, landlord_id: int, data: CustomLeaseCreate) -> CustomLease:
     listing = get_owned_listing(db, data.listing_id, landlord_id)
     if data.tenant_id:
          get_user_or_404(db, data.tenant_id)

     lease = CustomLease(
          listing_id=listing.id,
          landlord_id=landlord_id,
          tenant_id=data.tenant_id,
          status=LeaseStatus.DRAFT,
          lease_name=data.lease_name,
          description=data.description,
          property_type=data.property_type,
          file_url=data.file_url,
          start_date=data.start_date,
          end_date=data.end_date,
          rent_amount=data.rent_amount,
          security_deposit=data.security_deposit,
          payment_frequency=data.payment_frequency,
          notes=data.notes,
     )
     with atomic(db):
          db.add(lease)
     logger.info("Custom lease %s created for listing %s", lease.id, listing.id)
     return lease


def create_lease(
     db: Session,
     lease_type: LeaseType,
     landlord_id: int,
     data: Union[StandardLeaseCreate, CustomLeaseCreate],
) -> Lease:
     if lease_type == LeaseType.CUSTOM:
          return create_custom_lease(db, landlord_id, data)
     return create_standard_lease(db, landlord_id, data)


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------

def _load(db: Session, lease_type: Optional[LeaseType], lease_id: int) -> Lease:
     model = LEASE_MODELS[lease_type] if lease_type else Lease
     lease = db.get(model, lease_id)
     if lease is None:
          raise NotFoundError(f"Lease with ID {lease_id} not found")
     return lease


def _can_view(lease: Lease, user: CurrentUser) -> bool:
     return lease.landlord_id == user.id or lease.tenant_id == user.id


def can_view_document(db: Session, user: CurrentUser, url: str) -> bool:
     """True when ``url`` is the uploaded file or rendered contract of a lease the caller can see."""
     candidates = (
          db.query(CustomLease).filter(CustomLease.file_url == url).all()
          + db.query(StandardLease).filter(StandardLease.contract_url == url).all()
     )
     return any(_can_view(lease, user) for lease in candidates)


def get_lease(db: Session, lease_id: int, user: CurrentUser, lease_type: Optional[LeaseType] = None) -> Lease:
     lease = _load(db, lease_type, lease_id)
     if not _can_view(lease, user):
          raise ForbiddenError("You do not have permission to view this lease")
     return refresh_expiration(db, lease)


def list_leases(
     db: Session,
     user: CurrentUser,
     lease_type: Optional[LeaseType] = None,
     status: Optional[LeaseStatus] = None,
     listing_id: Optional[int] = None,
) -> list[Lease]:
     """
     Leases visible to the caller: landlords see the leases they own,
     tenants the leases bound to them.
     """
     scope = Lease.landlord_id == user.id if user.is_landlord else Lease.tenant_id == user.id
     expire_overdue_leases(db, scope)

     model = LEASE_MODELS[lease_type] if lease_type else Lease
     query = db.query(model).filter(scope)
     if status is not None:
          query = query.filter(Lease.status == status)
     if listing_id is not None:
          query = query.filter(Lease.listing_id == listing_id)
     return query.order_by(Lease.created_at.desc(), Lease.id.desc()).all()


# ---------------------------------------------------------------------------
# Update / terminate / delete
# ---------------------------------------------------------------------------

def _get_owned(db: Session, lease_type: LeaseType, lease_id: int, landlord_id: int) -> Lease:
     lease = _load(db, lease_type, lease_id)
     if lease.landlord_id != landlord_id:
          raise ForbiddenError("You do not have permission to modify this lease")
     return refresh_expiration(db, lease)


def update_lease(
     db: Session,
     lease_type: LeaseType,
     lease_id: int,
     landlord_id: int,
     data: Union[StandardLeaseUpdate, CustomLeaseUpdate],
) -> Lease:
     lease = _get_owned(db, lease_type, lease_id, landlord_id)
     if lease.status in CLOSED_STATUSES:
          raise InvalidStateError(f"Cannot update a lease with status {lease.status.value}")

     changes = data.model_dump(exclude_unset=True)
     end_date = changes.get("end_date", lease.end_date)
     if end_date is not None and lease.start_date is not None and end_date <= lease.start_date:
          raise InvalidStateError("end_date must be after start_date")

     with atomic(db):
          for field, value in changes.items():
               setattr(lease, field, value)
     logger.info("Lease %s updated: %s", lease.id, sorted(changes))
     return lease


def terminate_lease(
     db: Session,
     lease_type: LeaseType,
     lease_id: int,
     landlord_id: int,
     data: LeaseTerminate,
) -> Lease:
     lease = _get_owned(db, lease_type, lease_id, landlord_id)
     if lease.status not in (LeaseStatus.ACTIVE, LeaseStatus.DRAFT):
          raise InvalidStateError(f"Cannot terminate a lease with status {lease.status.value}")

     with atomic(db):
          lease.status = LeaseStatus.TERMINATED
          lease.termination_date = data.termination_date or utcnow()
          lease.termination_reason = data.reason
          lease.termination_notes = data.notes
          lease.terminated_by = landlord_id
     # Listing stays RENTED; relisting is the landlord's call
     logger.info("Lease %s terminated by %s: %s", lease.id, landlord_id, data.reason)
     return lease


def delete_lease(db: Session, lease_type: LeaseType, lease_id: int, landlord_id: int) -> None:
     lease = _get_owned(db, lease_type, lease_id, landlord_id)
     if lease.status == LeaseStatus.ACTIVE:
          raise InvalidStateError("Cannot delete an active lease; terminate it instead")

     with atomic(db):
          db.query(Application).filter(Application.lease_id == lease.id).update(
               {Application.lease_id: None}, synchronize_session="fetch"
          )
          db.query(Payment).filter(Payment.lease_id == lease.id).update(
               {Payment.lease_id: None}, synchronize_session="fetch"
          )
          db.query(LeaseInvite).filter(LeaseInvite.lease_id == lease.id).delete(synchronize_session="fetch")
          db.delete(lease)
     logger.info("Lease %s deleted by %s", lease_id, landlord_id)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def lease_to_dict(lease: Lease) -> dict:
     """Flatten either variant into the shared LeaseResponse shape."""
     data = {
          "id": lease.id,
          "lease_type": lease.lease_type.value,
          "listing_id": lease.listing_id,
          "landlord_id": lease.landlord_id,
          "tenant_id": lease.tenant_id,
          "status": lease.status.value,
          "start_date": lease.start_date,
          "end_date": lease.end_date,
          "rent_amount": lease.rent_amount,
          "security_deposit": lease.security_deposit,
          "payment_frequency": lease.payment_frequency,
          "notes": lease.notes,
          "termination_date": lease.termination_date,
          "termination_reason": lease.termination_reason,
          "termination_notes": lease.termination_notes,
          "terminated_by": lease.terminated_by,
          "created_at": lease.created_at,
     }
     if isinstance(lease, StandardLease):
          data.update(
               lease_term_type=lease.lease_term_type,
               payment_day=lease.payment_day,
               document_snapshot=lease.snapshot.to_dict(),
               contract_url=lease.contract_url,
          )
     elif isinstance(lease, CustomLease):
          data.update(
               lease_name=lease.lease_name,
               description=lease.description,
               property_type=lease.property_type,
               file_url=lease.file_url,
          )
     return data
