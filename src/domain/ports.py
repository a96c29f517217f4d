"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the value types the domain works with and the
interfaces (ports) it requires from infrastructure. Adapters implement
these protocols via structural subtyping.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol


class AccountState(str, Enum):
    """
    Verification lifecycle states.

    State Transitions (forward-only):
    - UNREGISTERED -> PENDING_VERIFICATION (registration)
    - PENDING_VERIFICATION -> VERIFIED (token consumed)

    VERIFIED is terminal: email_verified never flips back and the
    token fields stay cleared.
    """

    UNREGISTERED = "UNREGISTERED"
    PENDING_VERIFICATION = "PENDING_VERIFICATION"
    VERIFIED = "VERIFIED"


@dataclass(frozen=True)
class User:
    """
    User record as returned by default queries.

    Deliberately carries no password hash and no verification token
    fields; those are only reachable through dedicated repository calls.
    """

    id: str
    name: str
    email: str
    email_verified: bool
    created_at: datetime
    updated_at: datetime
    phone: str | None = None
    occupation: str | None = None
    source: str | None = None


@dataclass(frozen=True)
class NewUser:
    """Everything needed to insert a fresh, unverified user."""

    name: str
    email: str
    password_hash: str
    verify_token: str
    verify_token_expires: datetime
    phone: str | None = None
    occupation: str | None = None
    source: str | None = None


@dataclass(frozen=True)
class SessionCredential:
    """Signed session token plus its absolute expiry."""

    token: str
    expires_at: datetime


@dataclass(frozen=True)
class SessionIdentity:
    """Identity claims decoded from a valid session credential."""

    user_id: str
    email: str
    name: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class DemoRequest:
    id: str
    name: str
    email: str
    contact: str
    designation: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ContactMessage:
    id: str
    name: str
    email: str
    message: str
    created_at: datetime
    updated_at: datetime
    phone: str | None = None
    subject: str | None = None


class UserRepository(Protocol):
    """Port interface for user persistence."""

    def create_user(self, new_user: NewUser) -> User | None:
        """
        Insert a new unverified user.

        Email uniqueness must be enforced by the store itself so that
        concurrent registrations for one address yield exactly one row.

        Returns:
            The created user, or None if the email is already taken
        """
        ...

    def find_by_email(self, email: str) -> User | None:
        """Look up a user by normalized email."""
        ...

    def find_by_id(self, user_id: str) -> User | None:
        """Look up a user by id."""
        ...

    def find_credentials(self, email: str) -> tuple[User, str] | None:
        """
        Look up a user together with the stored password hash.

        This is the only query that exposes the hash.
        """
        ...

    def consume_verification_token(self, token_digest: str, now: datetime) -> User | None:
        """
        Atomically match and consume a verification token.

        A row matches when its stored digest equals token_digest and its
        expiry is strictly after now. On match the row is marked verified
        and both token fields are cleared in the same operation, so two
        concurrent calls with the same digest see exactly one success.

        Returns:
            The verified user, or None if nothing matched
        """
        ...

    def replace_verification_token(
        self, user_id: str, token_digest: str, expires_at: datetime
    ) -> bool:
        """
        Overwrite the token fields of a still-unverified user.

        Returns:
            True if the token was replaced, False if the user is gone
            or already verified
        """
        ...


class IntakeRepository(Protocol):
    """Port interface for form intake persistence."""

    def create_demo_request(
        self, name: str, email: str, contact: str, designation: str
    ) -> DemoRequest: ...

    def create_contact_message(
        self,
        name: str,
        email: str,
        message: str,
        phone: str | None,
        subject: str | None,
    ) -> ContactMessage: ...


class Notifier(Protocol):
    """
    Port interface for outbound email.

    Implementations should hand the message off and return without
    waiting for delivery. Callers treat every failure as non-fatal and
    ignore the return value; an adapter may hand back a delivery handle.
    """

    def send_email(self, to: str, subject: str, html: str) -> object:
        """
        Send an HTML email.

        Args:
            to: Recipient address
            subject: Subject line
            html: HTML body
        """
        ...


class SessionSigner(Protocol):
    """Port interface for minting and checking session credentials."""

    def issue(self, user: User) -> SessionCredential: ...

    def decode(self, token: str) -> SessionIdentity:
        """
        Validate a credential and return its identity claims.

        Raises:
            Unauthorized: With reason MALFORMED or EXPIRED
        """
        ...
