from datetime import timedelta

import pytest
from sqlalchemy import text

from conftest import RENDERED_CONTRACT_URL, auth
from exceptions import AlreadySignedError, ConflictError
from models import Lease, LeaseInvite, LeaseStatus, Listing, ListingStatus, StandardLease
from services import contract_renderer, invite_service, signing_service
from utils.dates import utcnow


def _invite(client, landlord, lease, lease_type="STANDARD", **extra):
     response = client.post(
          f"/leases-invite/{lease.id}/invite",
          json={"lease_type": lease_type, **extra},
          headers=auth(landlord),
     )
     assert response.status_code == 201, response.text
     return response.json()


def _sign(client, token, user):
     return client.post(f"/leases-invite/sign/{token}", json={"user_id": user.id})


def test_approve_invite_sign_then_sign_again(client, db_session, landlord, tenant, listing, sent_emails):
     created = client.post("/applications", json={"listing_id": listing.id}, headers=auth(landlord)).json()
     client.put(
          f"/applications/public/{created['public_id']}",
          json={"full_name": "Tess Tenant", "email": "tenant@example.com", "tenant_id": tenant.id},
     )
     decision = client.patch(
          f"/applications/{created['id']}/status",
          json={"status": "APPROVED"},
          headers=auth(landlord),
     ).json()
     lease_id = decision["lease"]["id"]

     invite = client.post(
          f"/leases-invite/{lease_id}/invite",
          json={"lease_type": "STANDARD", "tenant_id": tenant.id},
          headers=auth(landlord),
     ).json()
     assert invite["signed"] is False
     assert invite["tenant_id"] is None
     assert invite["url"] == f"http://client.test/leases-invite/sign/{invite['token']}"
     assert len(invite["token"]) == 64
     assert "tenant@example.com" in [e["to"] for e in sent_emails]

     response = _sign(client, invite["token"], tenant)

     assert response.status_code == 200, response.text
     body = response.json()
     assert body["invite"]["signed"] is True
     assert body["invite"]["tenant_id"] == tenant.id
     assert body["lease"]["status"] == "ACTIVE"
     assert body["lease"]["tenant_id"] == tenant.id

     db_session.expire_all()
     assert db_session.get(Listing, listing.id).status == ListingStatus.RENTED

     again = _sign(client, invite["token"], tenant)

     assert again.status_code == 409
     assert again.json()["error"] == "ALREADY_SIGNED"


def test_sign_conflicts_with_existing_active_lease(client, db_session, landlord, tenant, listing, make_lease):
     existing = make_lease(listing, tenant, status=LeaseStatus.ACTIVE)
     draft = make_lease(listing)
     invite = _invite(client, landlord, draft)

     response = _sign(client, invite["token"], tenant)

     assert response.status_code == 409
     body = response.json()
     assert body["error"] == "CONFLICT"
     assert body["existing_lease_id"] == existing.id

     db_session.expire_all()
     assert db_session.get(LeaseInvite, invite["id"]).signed is False
     assert db_session.get(Lease, draft.id).status == LeaseStatus.DRAFT


def test_expired_active_lease_does_not_block_signing(client, landlord, tenant, listing, make_lease):
     start = utcnow() - timedelta(days=400)
     make_lease(listing, tenant, status=LeaseStatus.ACTIVE, start=start, end=start + timedelta(days=365))
     draft = make_lease(listing)
     invite = _invite(client, landlord, draft)

     response = _sign(client, invite["token"], tenant)

     assert response.status_code == 200, response.text


def test_expired_invite_is_refused_without_changes(client, db_session, landlord, tenant, listing, make_lease):
     draft = make_lease(listing)
     invite = _invite(client, landlord, draft)
     stored = db_session.get(LeaseInvite, invite["id"])
     stored.expires_at = utcnow() - timedelta(minutes=1)
     db_session.commit()

     response = _sign(client, invite["token"], tenant)

     assert response.status_code == 410
     assert response.json()["error"] == "EXPIRED"
     db_session.expire_all()
     assert db_session.get(LeaseInvite, invite["id"]).signed is False
     assert db_session.get(Lease, draft.id).status == LeaseStatus.DRAFT
     assert db_session.get(Listing, listing.id).status == ListingStatus.ACTIVE


def test_expired_invite_lookup(client, db_session, landlord, listing, make_lease):
     invite = _invite(client, landlord, make_lease(listing))
     db_session.get(LeaseInvite, invite["id"]).expires_at = utcnow() - timedelta(days=1)
     db_session.commit()

     response = client.get(f"/leases-invite/invite/{invite['token']}")

     assert response.status_code == 410


def test_invite_lookup_shows_terms(client, landlord, listing, make_lease):
     draft = make_lease(listing)
     invite = _invite(client, landlord, draft)

     response = client.get(f"/leases-invite/invite/{invite['token']}")

     assert response.status_code == 200
     terms = response.json()["lease"]
     assert terms["lease_id"] == draft.id
     assert terms["status"] == "DRAFT"
     assert terms["listing_title"] == "Sunny 2BR"
     assert terms["landlord_name"] == "Lara Lord"


def test_unknown_token(client, tenant):
     assert client.get("/leases-invite/invite/nope").status_code == 404
     assert _sign(client, "nope", tenant).status_code == 404


def test_invite_requires_draft_lease(client, landlord, tenant, listing, make_lease):
     active = make_lease(listing, tenant, status=LeaseStatus.ACTIVE)

     response = client.post(
          f"/leases-invite/{active.id}/invite",
          json={"lease_type": "STANDARD"},
          headers=auth(landlord),
     )

     assert response.status_code == 409
     assert response.json()["error"] == "INVALID_STATE"


def test_invite_for_other_landlords_lease_is_forbidden(client, other_landlord, listing, make_lease):
     draft = make_lease(listing)

     response = client.post(
          f"/leases-invite/{draft.id}/invite",
          json={"lease_type": "STANDARD"},
          headers=auth(other_landlord),
     )

     assert response.status_code == 403


def test_invite_with_wrong_lease_type_is_not_found(client, landlord, listing, make_lease):
     draft = make_lease(listing)

     response = client.post(
          f"/leases-invite/{draft.id}/invite",
          json={"lease_type": "CUSTOM"},
          headers=auth(landlord),
     )

     assert response.status_code == 404


def test_signing_standard_lease_renders_contract(
     client, db_session, landlord, tenant, listing, make_lease, rendered_contracts
):
     draft = make_lease(listing)
     invite = _invite(client, landlord, draft)

     assert _sign(client, invite["token"], tenant).status_code == 200

     db_session.expire_all()
     assert db_session.get(StandardLease, draft.id).contract_url == RENDERED_CONTRACT_URL
     fields = rendered_contracts[0]
     assert fields["landlord_full_name"] == "Lara Lord"
     # Snapshot had no tenant; the signer's profile fills the gap
     assert fields["tenant_full_name"] == "Tess Tenant"
     assert fields["tenant_email"] == "tenant@example.com"


def test_signing_custom_lease_skips_contract(client, landlord, tenant, listing, make_lease, rendered_contracts):
     draft = make_lease(listing, custom=True)
     invite = _invite(client, landlord, draft, lease_type="CUSTOM")

     response = _sign(client, invite["token"], tenant)

     assert response.status_code == 200, response.text
     assert response.json()["lease"]["lease_type"] == "CUSTOM"
     assert rendered_contracts == []


def test_contract_failure_leaves_lease_active(client, db_session, landlord, tenant, listing, make_lease, monkeypatch):
     def failing_render(fields):
          raise contract_renderer.ContractRenderError("renderer down")

     monkeypatch.setattr(contract_renderer, "render_contract", failing_render)
     draft = make_lease(listing)
     invite = _invite(client, landlord, draft)

     assert _sign(client, invite["token"], tenant).status_code == 200

     db_session.expire_all()
     lease = db_session.get(StandardLease, draft.id)
     assert lease.status == LeaseStatus.ACTIVE
     assert lease.contract_url is None


def test_concurrent_signer_loses_in_transaction(db_session, landlord, tenant, listing, make_lease):
     draft = make_lease(listing)
     invite = invite_service.generate_invite(db_session, draft.id, "STANDARD", landlord.id)
     # Another request signs between our pre-checks and our write
     invite_service.find_invite(db_session, invite.token)
     db_session.execute(
          text("UPDATE lease_invites SET signed = 1 WHERE id = :id"), {"id": invite.id}
     )
     db_session.commit()

     with pytest.raises(AlreadySignedError):
          signing_service.sign_lease(db_session, invite.token, tenant.id)

     db_session.expire_all()
     assert db_session.get(Lease, draft.id).status == LeaseStatus.DRAFT
     assert db_session.get(Listing, listing.id).status == ListingStatus.ACTIVE


def test_sign_rejects_unknown_user(client, db_session, landlord, listing, make_lease):
     invite = _invite(client, landlord, make_lease(listing))

     response = client.post(f"/leases-invite/sign/{invite['token']}", json={"user_id": 9999})

     assert response.status_code == 404
     db_session.expire_all()
     assert db_session.get(LeaseInvite, invite["id"]).signed is False


def test_signer_row_is_locked_before_active_lease_recheck(
     db_session, landlord, tenant, listing, make_lease, monkeypatch
):
     draft = make_lease(listing)
     invite = invite_service.generate_invite(db_session, draft.id, "STANDARD", landlord.id)
     calls = []
     real_lock = signing_service._lock_signer
     real_find = signing_service.find_active_lease_for_tenant

     def recording_lock(db, user_id):
          calls.append(("lock", user_id))
          return real_lock(db, user_id)

     def recording_find(db, tenant_id, now=None, exclude_lease_id=None):
          calls.append(("check", exclude_lease_id))
          return real_find(db, tenant_id, now, exclude_lease_id=exclude_lease_id)

     monkeypatch.setattr(signing_service, "_lock_signer", recording_lock)
     monkeypatch.setattr(signing_service, "find_active_lease_for_tenant", recording_find)

     signing_service.sign_lease(db_session, invite.token, tenant.id)

     assert calls == [("check", None), ("lock", tenant.id), ("check", draft.id)]


def test_activation_committed_while_waiting_for_lock_is_seen(
     db_session, landlord, tenant, listing, make_lease, monkeypatch
):
     other = make_lease(listing)
     draft = make_lease(listing)
     invite = invite_service.generate_invite(db_session, draft.id, "STANDARD", landlord.id)
     real_lock = signing_service._lock_signer

     def lock_after_other_signing(db, user_id):
          # The tenant's other signing finishes while we wait on the row lock
          db.execute(
               text("UPDATE leases SET status = 'ACTIVE', tenant_id = :tenant WHERE id = :id"),
               {"tenant": user_id, "id": other.id},
          )
          return real_lock(db, user_id)

     monkeypatch.setattr(signing_service, "_lock_signer", lock_after_other_signing)

     with pytest.raises(ConflictError) as excinfo:
          signing_service.sign_lease(db_session, invite.token, tenant.id)

     assert excinfo.value.existing_lease_id == other.id
     db_session.expire_all()
     assert db_session.get(LeaseInvite, invite.id).signed is False
     assert db_session.get(Lease, draft.id).status == LeaseStatus.DRAFT
