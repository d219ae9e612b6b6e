from datetime import timedelta

import pytest

from conftest import auth
from models import Application, ApplicationStatus, Lease, LeaseInvite, LeaseStatus, Payment, PaymentStatus, PaymentType
from services import sweep_expired_leases
from utils.dates import utcnow


def _lease_body(listing, **extra):
     start = utcnow() + timedelta(days=30)
     return {
          "listing_id": listing.id,
          "start_date": start.isoformat(),
          "end_date": (start + timedelta(days=365)).isoformat(),
          "rent_amount": 2400,
          "security_deposit": 1200,
          **extra,
     }


def test_create_standard_lease_freezes_snapshot(client, db_session, landlord, tenant, listing):
     response = client.post(
          "/leases",
          json=_lease_body(listing, tenant_id=tenant.id),
          headers=auth(landlord),
     )

     assert response.status_code == 201, response.text
     data = response.json()
     assert data["status"] == "DRAFT"
     assert data["lease_type"] == "STANDARD"
     snapshot = data["document_snapshot"]
     assert snapshot["landlord_full_name"] == "Lara Lord"
     assert snapshot["landlord_address"] == "1 Owner Way, Vancouver"
     assert snapshot["tenant_email"] == "tenant@example.com"
     assert snapshot["unit_number"] == "4B"

     # Later profile edits do not reach the lease document
     landlord.first_name = "Renamed"
     db_session.commit()
     again = client.get(f"/leases/{data['id']}", headers=auth(landlord)).json()
     assert again["document_snapshot"]["landlord_full_name"] == "Lara Lord"


def test_create_lease_rejects_bad_period(client, landlord, listing):
     start = utcnow()
     body = _lease_body(listing, start_date=start.isoformat(), end_date=(start - timedelta(days=1)).isoformat())

     response = client.post("/leases", json=body, headers=auth(landlord))

     assert response.status_code == 422


def test_create_lease_on_foreign_listing_is_forbidden(client, other_landlord, listing):
     response = client.post("/leases", json=_lease_body(listing), headers=auth(other_landlord))

     assert response.status_code == 403


def test_create_custom_lease(client, landlord, listing):
     response = client.post(
          "/custom-leases",
          json={
               "listing_id": listing.id,
               "lease_name": "Our own lease",
               "file_url": "https://files.test/our-lease.pdf",
          },
          headers=auth(landlord),
     )

     assert response.status_code == 201, response.text
     data = response.json()
     assert data["lease_type"] == "CUSTOM"
     assert data["lease_name"] == "Our own lease"
     assert data["document_snapshot"] is None


def test_list_expires_overdue_active_leases(client, db_session, landlord, tenant, listing, make_lease):
     start = utcnow() - timedelta(days=400)
     overdue = make_lease(listing, tenant, status=LeaseStatus.ACTIVE, start=start, end=start + timedelta(days=365))
     current = make_lease(listing, tenant, status=LeaseStatus.ACTIVE)

     response = client.get("/leases", headers=auth(landlord))

     assert response.status_code == 200
     statuses = {lease["id"]: lease["status"] for lease in response.json()["leases"]}
     assert statuses == {overdue.id: "EXPIRED", current.id: "ACTIVE"}
     db_session.expire_all()
     assert db_session.get(Lease, overdue.id).status == LeaseStatus.EXPIRED


def test_get_expires_overdue_lease(client, landlord, tenant, listing, make_lease):
     start = utcnow() - timedelta(days=10)
     lease = make_lease(listing, tenant, status=LeaseStatus.ACTIVE, start=start, end=start + timedelta(days=5))

     response = client.get(f"/leases/{lease.id}", headers=auth(tenant))

     assert response.status_code == 200
     assert response.json()["status"] == "EXPIRED"


def test_active_lease_without_end_date_never_expires(db_session, listing, tenant, make_lease):
     lease = make_lease(listing, tenant, status=LeaseStatus.ACTIVE)
     lease.end_date = None
     db_session.commit()

     assert sweep_expired_leases(db_session) == 0
     assert db_session.get(Lease, lease.id).status == LeaseStatus.ACTIVE


def test_sweep_is_idempotent(db_session, listing, tenant, make_lease):
     start = utcnow() - timedelta(days=10)
     make_lease(listing, tenant, status=LeaseStatus.ACTIVE, start=start, end=start + timedelta(days=5))

     assert sweep_expired_leases(db_session) == 1
     assert sweep_expired_leases(db_session) == 0


def test_tenant_sees_only_their_leases(client, listing, tenant, other_tenant, make_lease):
     mine = make_lease(listing, tenant)
     theirs = make_lease(listing, other_tenant)

     listed = client.get("/leases", headers=auth(tenant)).json()["leases"]

     assert [lease["id"] for lease in listed] == [mine.id]
     assert client.get(f"/leases/{theirs.id}", headers=auth(tenant)).status_code == 403


def test_list_filters_by_type_and_status(client, landlord, tenant, listing, make_lease):
     make_lease(listing, tenant, status=LeaseStatus.ACTIVE)
     custom = make_lease(listing, custom=True)

     custom_only = client.get("/leases?lease_type=CUSTOM", headers=auth(landlord)).json()
     drafts = client.get("/custom-leases?status=DRAFT", headers=auth(landlord)).json()

     assert [lease["id"] for lease in custom_only["leases"]] == [custom.id]
     assert [lease["id"] for lease in drafts["leases"]] == [custom.id]


def test_update_lease(client, landlord, listing, make_lease):
     lease = make_lease(listing)

     response = client.put(
          f"/leases/{lease.id}",
          json={"rent_amount": 2500, "notes": "Parking included"},
          headers=auth(landlord),
     )

     assert response.status_code == 200, response.text
     assert float(response.json()["rent_amount"]) == 2500
     assert response.json()["notes"] == "Parking included"


def test_update_rejects_end_before_start(client, landlord, listing, make_lease):
     lease = make_lease(listing)

     response = client.put(
          f"/leases/{lease.id}",
          json={"end_date": (lease.start_date - timedelta(days=1)).isoformat()},
          headers=auth(landlord),
     )

     assert response.status_code == 409


@pytest.mark.parametrize("field", ["end_date", "rent_amount"])
def test_update_refuses_null_for_required_terms(client, db_session, landlord, listing, make_lease, field):
     lease = make_lease(listing)
     before = getattr(lease, field)

     response = client.put(f"/leases/{lease.id}", json={field: None}, headers=auth(landlord))

     assert response.status_code == 422
     db_session.expire_all()
     assert getattr(db_session.get(Lease, lease.id), field) == before


def test_terminate_then_update_is_refused(client, landlord, tenant, listing, make_lease):
     lease = make_lease(listing, tenant, status=LeaseStatus.ACTIVE)

     response = client.post(
          f"/leases/{lease.id}/terminate",
          json={"reason": "Tenant moved out", "notes": "Keys returned"},
          headers=auth(landlord),
     )

     assert response.status_code == 200, response.text
     data = response.json()
     assert data["status"] == "TERMINATED"
     assert data["termination_reason"] == "Tenant moved out"
     assert data["terminated_by"] == landlord.id
     assert data["termination_date"] is not None

     assert client.put(f"/leases/{lease.id}", json={"notes": "x"}, headers=auth(landlord)).status_code == 409
     again = client.post(f"/leases/{lease.id}/terminate", json={"reason": "again"}, headers=auth(landlord))
     assert again.status_code == 409


def test_tenant_cannot_terminate(client, tenant, listing, make_lease):
     lease = make_lease(listing, tenant, status=LeaseStatus.ACTIVE)

     response = client.post(f"/leases/{lease.id}/terminate", json={"reason": "x"}, headers=auth(tenant))

     assert response.status_code == 403


def test_delete_active_lease_is_refused(client, landlord, tenant, listing, make_lease):
     lease = make_lease(listing, tenant, status=LeaseStatus.ACTIVE)

     response = client.delete(f"/leases/{lease.id}", headers=auth(landlord))

     assert response.status_code == 409


def test_delete_lease_unlinks_dependents(client, db_session, landlord, tenant, listing, make_lease):
     lease = make_lease(listing, tenant)
     application = Application(
          public_id="pub-linked",
          listing_id=listing.id,
          landlord_id=landlord.id,
          tenant_id=tenant.id,
          status=ApplicationStatus.REJECTED,
          lease_id=lease.id,
     )
     payment = Payment(
          lease_id=lease.id,
          tenant_id=tenant.id,
          amount=100,
          type=PaymentType.RENT,
          landlord_id=landlord.id,
          status=PaymentStatus.PENDING,
          due_date=utcnow(),
     )
     invite = LeaseInvite(
          token="t" * 64,
          url="http://client.test/leases-invite/sign/" + "t" * 64,
          lease_id=lease.id,
          lease_type=lease.lease_type,
          expires_at=utcnow() + timedelta(days=7),
     )
     db_session.add_all([application, payment, invite])
     db_session.commit()

     response = client.delete(f"/leases/{lease.id}", headers=auth(landlord))

     assert response.status_code == 204
     db_session.expire_all()
     assert db_session.get(Lease, lease.id) is None
     assert db_session.get(Application, application.id).lease_id is None
     assert db_session.get(Payment, payment.id).lease_id is None
     assert db_session.query(LeaseInvite).count() == 0


def test_custom_lease_routes_do_not_serve_standard_leases(client, landlord, listing, make_lease):
     lease = make_lease(listing)

     assert client.get(f"/custom-leases/{lease.id}", headers=auth(landlord)).status_code == 404
