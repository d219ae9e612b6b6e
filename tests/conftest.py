"""
Pytest fixtures for the leasing backend test suite.

Provides:
- An in-memory SQLite database shared by the app and the tests (StaticPool)
- A FastAPI TestClient wired to that database
- Landlord / tenant / listing rows and a lease factory
- Bearer tokens minted with python-jose
- Stubbed email and contract-renderer collaborators
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["CLIENT_URL"] = "http://client.test"

from datetime import timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import config
import database
from database import get_session
from main import app
from models import (
     Base,
     CustomLease,
     LeaseDocumentSnapshot,
     LeaseStatus,
     Listing,
     ListingStatus,
     MaintenanceRequest,
     StandardLease,
     User,
     UserRole,
)
from services import contract_renderer
from utils import email as email_utils
from utils.dates import utcnow

RENDERED_CONTRACT_URL = "https://contracts.test/lease.pdf"


@pytest.fixture
def engine():
     engine = create_engine(
          "sqlite://",
          connect_args={"check_same_thread": False},
          poolclass=StaticPool,
     )
     Base.metadata.create_all(bind=engine)
     yield engine
     Base.metadata.drop_all(bind=engine)
     engine.dispose()


@pytest.fixture
def db_session(engine, monkeypatch):
     TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
     # Background tasks open their own sessions through database.SessionLocal
     monkeypatch.setattr(database, "SessionLocal", TestingSession)
     session = TestingSession()
     yield session
     session.close()


@pytest.fixture
def client(db_session):
     def override_get_session():
          yield db_session

     app.dependency_overrides[get_session] = override_get_session
     with TestClient(app) as test_client:
          yield test_client
     app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
     """Capture outgoing email instead of calling Brevo."""
     sent = []

     def fake_send_email(to_email, subject, html):
          sent.append({"to": to_email, "subject": subject, "html": html})

     monkeypatch.setattr(email_utils, "send_email", fake_send_email)
     return sent


@pytest.fixture(autouse=True)
def rendered_contracts(monkeypatch):
     """Stub the contract renderer; records the field maps it was given."""
     calls = []

     def fake_render(fields):
          calls.append(fields)
          return RENDERED_CONTRACT_URL

     monkeypatch.setattr(contract_renderer, "render_contract", fake_render)
     return calls


def _user(db, email, first, last, role, **extra):
     user = User(email=email, first_name=first, last_name=last, role=role, **extra)
     db.add(user)
     db.commit()
     return user


@pytest.fixture
def landlord(db_session):
     return _user(
          db_session, "landlord@example.com", "Lara", "Lord", UserRole.LANDLORD,
          phone="604-555-0100", address="1 Owner Way, Vancouver",
     )


@pytest.fixture
def other_landlord(db_session):
     return _user(db_session, "other.landlord@example.com", "Otto", "Owner", UserRole.LANDLORD)


@pytest.fixture
def tenant(db_session):
     return _user(db_session, "tenant@example.com", "Tess", "Tenant", UserRole.TENANT, phone="604-555-0199")


@pytest.fixture
def other_tenant(db_session):
     return _user(db_session, "tenant2@example.com", "Theo", "Tenant", UserRole.TENANT)


@pytest.fixture
def listing(db_session, landlord):
     listing = Listing(
          landlord_id=landlord.id,
          title="Sunny 2BR",
          category="RESIDENTIAL",
          street_address="123 Main St",
          unit_number="4B",
          city="Vancouver",
          state="BC",
          country="Canada",
          zip_code="V5K0A1",
          rent_amount=Decimal("2400.00"),
          security_deposit=Decimal("1200.00"),
          rent_cycle="MONTHLY",
          status=ListingStatus.ACTIVE,
     )
     db_session.add(listing)
     db_session.commit()
     return listing


@pytest.fixture
def maintenance_request(db_session, listing, tenant):
     request = MaintenanceRequest(
          listing_id=listing.id,
          user_id=tenant.id,
          title="Leaking faucet",
          description="Kitchen faucet drips",
     )
     db_session.add(request)
     db_session.commit()
     return request


@pytest.fixture
def make_lease(db_session):
     """Insert a lease row directly, bypassing the service layer."""

     def _make(
          listing,
          tenant=None,
          status=LeaseStatus.DRAFT,
          start=None,
          end=None,
          custom=False,
     ):
          start = start or utcnow() - timedelta(days=1)
          end = end if end is not None else start + timedelta(days=365)
          common = dict(
               listing_id=listing.id,
               landlord_id=listing.landlord_id,
               tenant_id=tenant.id if tenant else None,
               status=status,
               start_date=start,
               end_date=end,
               rent_amount=listing.rent_amount,
               security_deposit=listing.security_deposit,
               payment_frequency="MONTHLY",
          )
          if custom:
               lease = CustomLease(lease_name="Uploaded lease", file_url="https://files.test/l.pdf", **common)
          else:
               snapshot = LeaseDocumentSnapshot(
                    landlord_full_name="Lara Lord",
                    landlord_email="landlord@example.com",
                    property_address=listing.street_address,
                    property_city=listing.city,
               )
               lease = StandardLease(document_snapshot=snapshot.to_dict(), **common)
          db_session.add(lease)
          db_session.commit()
          return lease

     return _make


def make_token(user) -> str:
     return jwt.encode(
          {"id": user.id, "role": user.role.value},
          config.JWT_SECRET,
          algorithm=config.JWT_ALGORITHM,
     )


def auth(user) -> dict:
     return {"Authorization": f"Bearer {make_token(user)}"}
