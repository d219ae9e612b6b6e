# utils/email.py
import logging
from html import escape

import requests

import config

logger = logging.getLogger(__name__)

BREVO_URL = "https://api.brevo.com/v3/smtp/email"


def send_email(to_email: str, subject: str, html: str):
     if not config.BREVO_API_KEY:
          raise Exception("BREVO_API_KEY is not set")

     response = requests.post(
          BREVO_URL,
          headers={
               "api-key": config.BREVO_API_KEY,
               "Content-Type": "application/json",
          },
          json={
               "sender": {"name": config.EMAIL_SENDER_NAME, "email": config.EMAIL_SENDER_ADDRESS},
               "to": [{"email": to_email}],
               "subject": subject,
               "htmlContent": html,
          },
          timeout=10,
     )
     if response.status_code not in (200, 201):
          raise Exception(f"Brevo error: {response.text}")


def send_quietly(to_email: str, subject: str, html: str) -> bool:
     """Fire-and-forget delivery for background tasks; failures are only logged."""
     try:
          send_email(to_email, subject, html)
          return True
     except Exception:
          logger.exception("Failed to send '%s' email to %s", subject, to_email)
          return False


def send_application_submitted_email(landlord_email: str, applicant_name: str, listing_title: str):
     return send_quietly(
          landlord_email,
          f"New application for {listing_title}",
          f"""
               <h2>New rental application</h2>
               <p><strong>{escape(applicant_name)}</strong> applied for <strong>{escape(listing_title)}</strong>.</p>
               <p>Review it from your dashboard.</p>
          """,
     )


def send_application_decision_email(applicant_email: str, applicant_name: str, listing_title: str, status: str):
     return send_quietly(
          applicant_email,
          f"Your application for {listing_title}",
          f"""
               <h2>Hi {escape(applicant_name)},</h2>
               <p>Your application for <strong>{escape(listing_title)}</strong> was <strong>{escape(status.lower())}</strong>.</p>
          """,
     )


def send_lease_invite_email(tenant_email: str, invite_url: str, expires_at):
     return send_quietly(
          tenant_email,
          "Your lease is ready to sign",
          f"""
               <h2>Your lease is ready</h2>
               <p><a href="{escape(invite_url)}">Review and sign your lease</a></p>
               <p>This link expires on {expires_at:%Y-%m-%d}.</p>
          """,
     )


def send_lease_signed_email(to_email: str, lease_id: int, listing_title: str):
     return send_quietly(
          to_email,
          "Lease signed",
          f"""
               <h2>Lease #{lease_id} is now active</h2>
               <p>The lease for <strong>{escape(listing_title)}</strong> has been signed.</p>
          """,
     )
