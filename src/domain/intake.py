"""
Form intake service - contact messages and demo requests.

Validate, persist, then tell the admin. No lifecycle beyond create.
"""

import logging
import re
from dataclasses import dataclass

from .accounts import normalize_email
from .exceptions import ValidationError
from .messages import contact_message_admin_email, demo_request_admin_email
from .ports import ContactMessage, DemoRequest, IntakeRepository, Notifier

logger = logging.getLogger(__name__)

_TEN_DIGITS = re.compile(r"^[0-9]{10}$")


@dataclass
class IntakeService:
    repository: IntakeRepository
    notifier: Notifier
    admin_email: str | None = None

    def submit_demo_request(
        self, name: str, email: str, contact: str, designation: str | None = None
    ) -> DemoRequest:
        """
        Store a demo request and notify the admin.

        Raises:
            ValidationError: Missing name/email/contact or contact not 10 digits
        """
        name = (name or "").strip()
        email = normalize_email(email or "")
        contact = (contact or "").strip()
        if not name or not email or not contact:
            raise ValidationError("Name, email, and contact fields are required.")
        if not _TEN_DIGITS.match(contact):
            raise ValidationError("Invalid contact number (must be 10 digits).")
        designation = (designation or "").strip() or "N/A"

        demo_request = self.repository.create_demo_request(name, email, contact, designation)
        logger.info("Stored demo request %s", demo_request.id)

        if self.admin_email:
            subject, html = demo_request_admin_email(
                name, email, contact, designation, demo_request.created_at
            )
            self._notify(subject, html)
        return demo_request

    def submit_contact_message(
        self,
        name: str,
        email: str,
        message: str,
        phone: str | None = None,
        subject: str | None = None,
    ) -> ContactMessage:
        """
        Store a contact form message and notify the admin.

        Raises:
            ValidationError: Missing name/email/message or phone not 10 digits
        """
        name = (name or "").strip()
        email = normalize_email(email or "")
        message = (message or "").strip()
        phone = (phone or "").strip() or None
        subject = (subject or "").strip() or None
        if not name or not email or not message:
            raise ValidationError("Name, email, and message are required.")
        if phone is not None and not _TEN_DIGITS.match(phone):
            raise ValidationError("Invalid phone number (must be 10 digits).")

        stored = self.repository.create_contact_message(name, email, message, phone, subject)
        logger.info("Stored contact message %s", stored.id)

        if self.admin_email:
            mail_subject, html = contact_message_admin_email(
                name, email, message, phone, subject, stored.created_at
            )
            self._notify(mail_subject, html)
        return stored

    def _notify(self, subject: str, html: str) -> None:
        try:
            self.notifier.send_email(self.admin_email, subject, html)
        except Exception:
            logger.exception("Failed to dispatch admin email %r", subject)
