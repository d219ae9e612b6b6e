from datetime import timedelta

import pytest

from conftest import auth
from exceptions import InvalidStateError
from models import Application, ApplicationStatus, Lease, StandardLease
from schemas.application import ApplicationStatusUpdate, ApplicationSubmit
from services import application_service
from utils.dates import utcnow


def _create_placeholder(client, landlord, listing, **extra):
     response = client.post(
          "/applications",
          json={"listing_id": listing.id, **extra},
          headers=auth(landlord),
     )
     assert response.status_code == 201, response.text
     return response.json()


def _submit(client, public_id, tenant=None, **extra):
     body = {"full_name": "Tess Tenant", "email": "tenant@example.com", **extra}
     if tenant is not None:
          body["tenant_id"] = tenant.id
     return client.put(f"/applications/public/{public_id}", json=body)


def test_create_placeholder_application(client, landlord, listing):
     data = _create_placeholder(client, landlord, listing)

     assert data["status"] == "NEW"
     assert data["is_placeholder"] is True
     assert data["full_name"] == "N/A"
     assert data["email"] == "na@example.com"
     assert data["tenant_id"] is None
     assert data["share_url"] == f"http://client.test/applications/apply/{data['public_id']}"
     assert len(data["public_id"]) >= 16


def test_create_application_requires_owned_listing(client, other_landlord, listing):
     response = client.post("/applications", json={"listing_id": listing.id}, headers=auth(other_landlord))

     assert response.status_code == 403
     assert response.json()["error"] == "FORBIDDEN"


def test_create_application_rejects_tenant_role(client, tenant, listing):
     response = client.post("/applications", json={"listing_id": listing.id}, headers=auth(tenant))

     assert response.status_code == 403


def test_create_application_requires_token(client, listing):
     response = client.post("/applications", json={"listing_id": listing.id})

     assert response.status_code == 401


def test_public_lookup_returns_listing_and_landlord(client, landlord, listing):
     created = _create_placeholder(client, landlord, listing)

     response = client.get(f"/applications/public/{created['public_id']}")

     assert response.status_code == 200
     body = response.json()
     assert body["listing"]["title"] == "Sunny 2BR"
     assert body["landlord"]["email"] == "landlord@example.com"


def test_public_lookup_unknown_id(client):
     response = client.get("/applications/public/does-not-exist")

     assert response.status_code == 404
     assert response.json()["error"] == "NOT_FOUND"


def test_public_lookup_expired_link_is_forbidden(client, landlord, listing):
     expired = (utcnow() - timedelta(days=1)).isoformat()
     created = _create_placeholder(client, landlord, listing, expiration_date=expired)

     response = client.get(f"/applications/public/{created['public_id']}")

     assert response.status_code == 403


def test_submit_public_application_fills_placeholder_and_notifies_landlord(
     client, landlord, tenant, listing, sent_emails
):
     created = _create_placeholder(client, landlord, listing)

     response = _submit(
          client,
          created["public_id"],
          tenant=tenant,
          phone="604-555-0199",
          employment_info=[{"employer_name": "Acme", "job_title": "Engineer", "income": 6500}],
     )

     assert response.status_code == 200, response.text
     data = response.json()
     assert data["status"] == "NEW"
     assert data["is_placeholder"] is False
     assert data["tenant_id"] == tenant.id
     assert data["employment_info"][0]["employer_name"] == "Acme"
     assert [e["to"] for e in sent_emails] == ["landlord@example.com"]


def test_submit_twice_is_refused(client, landlord, tenant, listing):
     created = _create_placeholder(client, landlord, listing)
     assert _submit(client, created["public_id"], tenant=tenant).status_code == 200

     response = _submit(client, created["public_id"], tenant=tenant)

     assert response.status_code == 409
     assert response.json()["error"] == "INVALID_STATE"


def test_approve_creates_exactly_one_draft_lease(client, db_session, landlord, tenant, listing):
     created = _create_placeholder(client, landlord, listing)
     _submit(client, created["public_id"], tenant=tenant)

     response = client.patch(
          f"/applications/{created['id']}/status",
          json={"status": "APPROVED", "decision_notes": "Great references"},
          headers=auth(landlord),
     )

     assert response.status_code == 200, response.text
     body = response.json()
     assert body["application"]["status"] == "APPROVED"
     lease = body["lease"]
     assert lease["status"] == "DRAFT"
     assert lease["lease_type"] == "STANDARD"
     assert lease["tenant_id"] == tenant.id
     assert lease["notes"] == f"Auto-generated from application {created['public_id']}"
     assert lease["payment_frequency"] == "MONTHLY"
     assert lease["document_snapshot"]["tenant_full_name"] == "Tess Tenant"
     assert lease["document_snapshot"]["property_address"] == "123 Main St"
     assert body["application"]["lease_id"] == lease["id"]
     assert db_session.query(Lease).count() == 1


def test_second_decision_is_refused(client, db_session, landlord, tenant, listing):
     created = _create_placeholder(client, landlord, listing)
     _submit(client, created["public_id"], tenant=tenant)
     url = f"/applications/{created['id']}/status"
     assert client.patch(url, json={"status": "APPROVED"}, headers=auth(landlord)).status_code == 200

     response = client.patch(url, json={"status": "APPROVED"}, headers=auth(landlord))

     assert response.status_code == 409
     assert db_session.query(Lease).count() == 1


def test_reject_creates_no_lease(client, db_session, landlord, tenant, listing, sent_emails):
     created = _create_placeholder(client, landlord, listing)
     _submit(client, created["public_id"], tenant=tenant)
     sent_emails.clear()

     response = client.patch(
          f"/applications/{created['id']}/status",
          json={"status": "REJECTED"},
          headers=auth(landlord),
     )

     assert response.status_code == 200
     assert response.json()["lease"] is None
     assert db_session.query(Lease).count() == 0
     assert [e["to"] for e in sent_emails] == ["tenant@example.com"]


def test_approval_is_rolled_back_when_lease_creation_fails(db_session, landlord, tenant, listing, monkeypatch):
     application = Application(
          public_id="pub-rollback",
          listing_id=listing.id,
          landlord_id=landlord.id,
          tenant_id=tenant.id,
          full_name="Tess Tenant",
          email="tenant@example.com",
          status=ApplicationStatus.NEW,
     )
     db_session.add(application)
     db_session.commit()

     def broken_draft(db, app):
          raise RuntimeError("disk full")

     monkeypatch.setattr(application_service, "_draft_lease_for", broken_draft)

     with pytest.raises(RuntimeError):
          application_service.update_application_status(
               db_session, application.id, landlord.id, ApplicationStatusUpdate(status="APPROVED")
          )

     db_session.expire_all()
     assert db_session.get(Application, application.id).status == ApplicationStatus.NEW
     assert db_session.get(Application, application.id).lease_id is None
     assert db_session.query(StandardLease).count() == 0


def test_list_applications_paginates_and_filters(client, landlord, listing):
     for _ in range(3):
          _create_placeholder(client, landlord, listing)

     response = client.get("/applications?page=1&page_size=2&status=NEW", headers=auth(landlord))

     assert response.status_code == 200
     body = response.json()
     assert body["total"] == 3
     assert len(body["applications"]) == 2
     assert body["page_size"] == 2


def test_get_application_of_other_landlord_is_forbidden(client, landlord, other_landlord, listing):
     created = _create_placeholder(client, landlord, listing)

     response = client.get(f"/applications/{created['id']}", headers=auth(other_landlord))

     assert response.status_code == 403


def test_delete_refused_for_approved_application_with_lease(client, landlord, tenant, listing):
     created = _create_placeholder(client, landlord, listing)
     _submit(client, created["public_id"], tenant=tenant)
     client.patch(f"/applications/{created['id']}/status", json={"status": "APPROVED"}, headers=auth(landlord))

     response = client.delete(f"/applications/{created['id']}", headers=auth(landlord))

     assert response.status_code == 409


def test_delete_application(client, db_session, landlord, listing):
     created = _create_placeholder(client, landlord, listing)

     response = client.delete(f"/applications/{created['id']}", headers=auth(landlord))

     assert response.status_code == 204
     assert db_session.get(Application, created["id"]) is None


def test_bulk_delete_is_all_or_nothing(client, db_session, landlord, listing):
     first = _create_placeholder(client, landlord, listing)
     second = _create_placeholder(client, landlord, listing)

     response = client.post(
          "/applications/bulk-delete",
          json={"ids": [first["id"], second["id"], 9999]},
          headers=auth(landlord),
     )

     assert response.status_code == 404
     assert response.json()["missing_ids"] == [9999]
     assert db_session.query(Application).count() == 2

     response = client.post(
          "/applications/bulk-delete",
          json={"ids": [first["id"], second["id"]]},
          headers=auth(landlord),
     )

     assert response.status_code == 200
     assert response.json() == {"deleted": 2}
     assert db_session.query(Application).count() == 0


def test_bulk_delete_refuses_foreign_applications(client, db_session, landlord, other_landlord, listing):
     created = _create_placeholder(client, landlord, listing)

     response = client.post(
          "/applications/bulk-delete",
          json={"ids": [created["id"]]},
          headers=auth(other_landlord),
     )

     assert response.status_code == 403
     assert db_session.query(Application).count() == 1


def test_submit_refused_after_decision(db_session, landlord, listing):
     application = Application(
          public_id="pub-decided",
          listing_id=listing.id,
          landlord_id=landlord.id,
          status=ApplicationStatus.CANCELLED,
     )
     db_session.add(application)
     db_session.commit()

     with pytest.raises(InvalidStateError):
          application_service.submit_public_application(
               db_session, "pub-decided", ApplicationSubmit(full_name="Late", email="late@example.com")
          )
     assert db_session.get(Application, application.id).status == ApplicationStatus.CANCELLED


def test_submitted_applicant_markup_is_escaped_in_landlord_email(client, landlord, listing, sent_emails):
     created = _create_placeholder(client, landlord, listing)

     response = _submit(
          client,
          created["public_id"],
          full_name='<a href="https://evil.test">Click to verify</a>',
     )

     assert response.status_code == 200, response.text
     html = sent_emails[0]["html"]
     assert "<a href" not in html
     assert "&lt;a href=&quot;https://evil.test&quot;&gt;Click to verify&lt;/a&gt;" in html


def test_approving_placeholder_creates_no_lease(client, db_session, landlord, listing):
     created = _create_placeholder(client, landlord, listing)

     response = client.patch(
          f"/applications/{created['id']}/status",
          json={"status": "APPROVED"},
          headers=auth(landlord),
     )

     assert response.status_code == 200, response.text
     body = response.json()
     assert body["application"]["status"] == "APPROVED"
     assert body["application"]["lease_id"] is None
     assert body["lease"] is None
     assert db_session.query(Lease).count() == 0
     assert db_session.get(Application, created["id"]).lease_id is None
