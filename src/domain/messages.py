"""Email subjects and HTML bodies sent by the domain services."""

from datetime import datetime
from html import escape

BRAND = "Acceleott"


def _subject_text(value: str) -> str:
    """Collapse whitespace; a header value cannot carry line breaks."""
    return " ".join(value.split())


def verification_email(name: str, verify_url: str) -> tuple[str, str]:
    safe_name = escape(name)
    safe_url = escape(verify_url, quote=True)
    html = f"""
<div style="font-family:Inter,Arial,sans-serif;color:#0f172a">
  <h2>Welcome to {BRAND}, {safe_name}!</h2>
  <p>Thanks for registering. Please confirm your email by clicking the button below.</p>
  <p style="margin:24px 0">
    <a href="{safe_url}"
       style="background:#0ea5a5;color:#fff;padding:12px 18px;border-radius:8px;
              text-decoration:none;font-weight:600">
      Verify my email
    </a>
  </p>
  <p>If the button doesn't work, copy this link:</p>
  <p style="word-break:break-all">{safe_url}</p>
  <hr style="border:none;border-top:1px solid #e5e7eb;margin:24px 0">
  <small>If you didn't create an account, you can ignore this email.</small>
</div>
"""
    return f"Confirm your email - {BRAND}", html


def new_user_admin_email(name: str, email: str, registered_at: datetime) -> tuple[str, str]:
    html = f"""
<p>A new user registered on {BRAND}:</p>
<ul>
  <li><strong>Name:</strong> {escape(name)}</li>
  <li><strong>Email:</strong> {escape(email)}</li>
  <li><strong>Registered:</strong> {registered_at:%Y-%m-%d %H:%M:%S %Z}</li>
</ul>
"""
    return f"New User Registered - {_subject_text(name)}", html


def demo_request_admin_email(
    name: str, email: str, contact: str, designation: str, received_at: datetime
) -> tuple[str, str]:
    html = f"""
<div style="font-family:Inter,Arial,sans-serif;color:#0f172a">
  <h2>New Demo Request Received</h2>
  <p><strong>Name:</strong> {escape(name)}</p>
  <p><strong>Email:</strong> {escape(email)}</p>
  <p><strong>Contact:</strong> {escape(contact)}</p>
  <p><strong>Designation:</strong> {escape(designation)}</p>
  <p><strong>Received At:</strong> {received_at:%Y-%m-%d %H:%M:%S %Z}</p>
</div>
"""
    return f"New Demo Request - {_subject_text(name)}", html


def contact_message_admin_email(
    name: str,
    email: str,
    message: str,
    phone: str | None,
    subject: str | None,
    received_at: datetime,
) -> tuple[str, str]:
    html = f"""
<div style="font-family:Inter,Arial,sans-serif;color:#0f172a">
  <h2>New Contact Message</h2>
  <p><strong>Name:</strong> {escape(name)}</p>
  <p><strong>Email:</strong> {escape(email)}</p>
  <p><strong>Phone:</strong> {escape(phone or "N/A")}</p>
  <p><strong>Subject:</strong> {escape(subject or "N/A")}</p>
  <p><strong>Message:</strong></p>
  <p style="white-space:pre-wrap">{escape(message)}</p>
  <p><strong>Received At:</strong> {received_at:%Y-%m-%d %H:%M:%S %Z}</p>
</div>
"""
    return f"New Contact Message - {_subject_text(name)}", html
