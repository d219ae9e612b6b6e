# services/access.py
"""
Ownership and identity checks shared by the services.
"""
from dataclasses import dataclass

from sqlalchemy.orm import Session

from exceptions import ForbiddenError, NotFoundError
from models import Listing, User, UserRole


@dataclass(frozen=True)
class CurrentUser:
     """Identity produced by the auth layer."""
     id: int
     role: UserRole

     @property
     def is_landlord(self) -> bool:
          return self.role in (UserRole.LANDLORD, UserRole.ADMIN)

     @property
     def is_tenant(self) -> bool:
          return self.role == UserRole.TENANT


def get_user_or_404(db: Session, user_id: int) -> User:
     user = db.get(User, user_id)
     if user is None:
          raise NotFoundError(f"User with ID {user_id} not found")
     return user


def get_owned_listing(db: Session, listing_id: int, landlord_id: int) -> Listing:
     """Return the listing if it exists and belongs to ``landlord_id``."""
     listing = db.get(Listing, listing_id)
     if listing is None:
          raise NotFoundError(f"Listing with ID {listing_id} not found")
     if listing.landlord_id != landlord_id:
          raise ForbiddenError("You do not own this listing")
     return listing
