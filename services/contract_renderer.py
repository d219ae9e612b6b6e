# services/contract_renderer.py
"""
Client for the external contract renderer.

The renderer fills the residential tenancy form from a flat field map and
returns the URL of the hosted PDF. Rendering is best-effort: it runs after
the signing transaction has committed and a failure only leaves the
lease without ``contract_url``.
"""
import logging
from datetime import datetime
from typing import Optional

import requests

import config
from database import get_session_context
from models import StandardLease, User

logger = logging.getLogger(__name__)


class ContractRenderError(Exception):
     """The renderer is unreachable, misconfigured or returned no document."""


def _fmt(value) -> Optional[str]:
     if value is None:
          return None
     if isinstance(value, datetime):
          return value.date().isoformat()
     return str(value)


def build_contract_fields(lease: StandardLease, tenant: Optional[User] = None) -> dict:
     """
     Flatten a standard lease into the renderer's field map.

     Snapshot values win; the signer's live profile only fills gaps the
     snapshot left empty.
     """
     snapshot = lease.snapshot.to_dict()
     if tenant is not None:
          live = {
               "tenant_full_name": tenant.full_name,
               "tenant_email": tenant.email,
               "tenant_phone": tenant.phone,
          }
          for key, value in live.items():
               if not snapshot.get(key):
                    snapshot[key] = value

     fields = {key: _fmt(value) for key, value in snapshot.items()}
     fields.update(
          start_date=_fmt(lease.start_date),
          end_date=_fmt(lease.end_date),
          rent_amount=_fmt(lease.rent_amount),
          security_deposit=_fmt(lease.security_deposit),
          payment_frequency=_fmt(lease.payment_frequency),
          payment_day=_fmt(lease.payment_day),
          lease_term_type=_fmt(lease.lease_term_type),
     )
     return {key: value for key, value in fields.items() if value is not None}


def render_contract(fields: dict) -> str:
     if not config.CONTRACT_RENDERER_URL:
          raise ContractRenderError("CONTRACT_RENDERER_URL is not set")

     headers = {"Content-Type": "application/json"}
     if config.CONTRACT_RENDERER_API_KEY:
          headers["api-key"] = config.CONTRACT_RENDERER_API_KEY

     try:
          response = requests.post(
               config.CONTRACT_RENDERER_URL,
               headers=headers,
               json={"template": "residential-tenancy", "fields": fields},
               timeout=config.CONTRACT_RENDERER_TIMEOUT,
          )
     except requests.RequestException as e:
          raise ContractRenderError(f"Contract renderer unreachable: {e}") from e

     if response.status_code not in (200, 201):
          raise ContractRenderError(f"Contract renderer error: {response.text}")

     document_url = response.json().get("document_url")
     if not document_url:
          raise ContractRenderError("Contract renderer returned no document_url")
     return document_url


def generate_contract_for_lease(lease_id: int, tenant_id: Optional[int] = None) -> Optional[str]:
     """
     Render and attach the contract for a signed standard lease.

     Runs as a background task with its own session. Never raises.
     """
     try:
          with get_session_context() as db:
               lease = db.get(StandardLease, lease_id)
               if lease is None or lease.contract_url:
                    return None
               tenant = db.get(User, tenant_id) if tenant_id else None
               lease.contract_url = render_contract(build_contract_fields(lease, tenant))
               logger.info("Contract rendered for lease %s", lease_id)
               return lease.contract_url
     except Exception:
          logger.exception("Contract rendering failed for lease %s", lease_id)
          return None
