"""
Account domain service - Verification lifecycle implementation.

This module contains the core business logic for registration, email
verification, resend and login.

Verification Lifecycle (Forward-Only Transitions)
=================================================

States:
- UNREGISTERED: No record for the email
- PENDING_VERIFICATION: Record exists, email_verified is false,
  exactly one active token digest + expiry stored
- VERIFIED: email_verified is true, token fields cleared

Valid Transitions:
    UNREGISTERED -> PENDING_VERIFICATION   (register)
    PENDING_VERIFICATION -> PENDING_VERIFICATION   (resend overwrites the token)
    PENDING_VERIFICATION -> VERIFIED   (token matched before expiry)

Invalid Transitions (never allowed):
    VERIFIED -> any

Note: Email uniqueness and single-use tokens are enforced by the
repository (unique constraint, conditional match-then-clear), not by
in-process locking.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from functools import lru_cache

from .credentials import (
    MAX_PASSWORD_BYTES,
    PasswordHasher,
    digest_verification_token,
    generate_verification_token,
)
from .exceptions import (
    DuplicateError,
    InvalidCredentials,
    InvalidOrExpiredToken,
    NotFoundError,
    NotVerifiedError,
    ValidationError,
)
from .messages import new_user_admin_email, verification_email
from .ports import (
    AccountState,
    NewUser,
    Notifier,
    SessionCredential,
    SessionSigner,
    User,
    UserRepository,
)

logger = logging.getLogger(__name__)

VERIFICATION_TTL = timedelta(hours=24)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@lru_cache
def _dummy_hash(rounds: int) -> str:
    # Compared against when the email is unknown so both login failure
    # paths pay for one bcrypt check.
    return PasswordHasher(rounds).hash("dummy_password_for_timing_safety")


def normalize_email(email: str) -> str:
    """Strip whitespace and lowercase."""
    return email.strip().lower()


def account_state(user: User | None) -> AccountState:
    if user is None:
        return AccountState.UNREGISTERED
    if user.email_verified:
        return AccountState.VERIFIED
    return AccountState.PENDING_VERIFICATION


@dataclass(frozen=True)
class LoginResult:
    user: User
    session: SessionCredential


@dataclass
class AccountService:
    """
    Domain service for the verification lifecycle.

    Orchestrates registration, token issuance, verification, resend and
    login. Collaborators are injected; the service holds no state of its
    own between calls.
    """

    repository: UserRepository
    notifier: Notifier
    session_signer: SessionSigner
    verify_url_base: str
    hasher: PasswordHasher = field(default_factory=PasswordHasher)
    admin_email: str | None = None
    verification_ttl: timedelta = VERIFICATION_TTL
    clock: Callable[[], datetime] = utcnow

    def register(
        self,
        name: str,
        email: str,
        password: str,
        phone: str | None = None,
        occupation: str | None = None,
        source: str | None = None,
    ) -> User:
        """
        Register a new, unverified user and email them a verification link.

        Args:
            name: Display name (trimmed)
            email: Email address (will be normalized)
            password: Plaintext password (hashed before persistence)
            phone, occupation, source: Optional profile fields

        Returns:
            The created user. The raw token is never returned.

        Raises:
            ValidationError: If name, email or password is missing, or the
                password exceeds 72 bytes
            DuplicateError: If the normalized email is already registered
        """
        name = (name or "").strip()
        normalized_email = normalize_email(email or "")
        if not name or not normalized_email or not password:
            raise ValidationError("Name, email, and password are required.")
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes.")

        password_hash = self.hasher.hash(password)
        raw_token = generate_verification_token()

        user = self.repository.create_user(
            NewUser(
                name=name,
                email=normalized_email,
                password_hash=password_hash,
                verify_token=digest_verification_token(raw_token),
                verify_token_expires=self.clock() + self.verification_ttl,
                phone=phone,
                occupation=occupation,
                source=source,
            )
        )
        if user is None:
            raise DuplicateError()

        logger.info("Registered user %s", user.id)
        self._send_verification(user, raw_token)

        if self.admin_email:
            subject, html = new_user_admin_email(user.name, user.email, user.created_at)
            self._notify(self.admin_email, subject, html)

        return user

    def verify_email(self, raw_token: str) -> User:
        """
        Consume a verification token and mark the owner verified.

        Wrong, already-consumed and expired tokens all fail the same way.

        Raises:
            InvalidOrExpiredToken: If no unexpired token matches
        """
        if not raw_token:
            raise InvalidOrExpiredToken()

        user = self.repository.consume_verification_token(
            digest_verification_token(raw_token), self.clock()
        )
        if user is None:
            raise InvalidOrExpiredToken()

        logger.info("Verified email for user %s", user.id)
        return user

    def resend_verification(self, email: str) -> bool:
        """
        Issue a fresh token for an unverified user, replacing the old one.

        Returns:
            True if a new email was sent, False if the account was already
            verified (no token change, no email)

        Raises:
            ValidationError: If email is missing
            NotFoundError: If no user has this email
        """
        normalized_email = normalize_email(email or "")
        if not normalized_email:
            raise ValidationError("Email is required.")

        user = self.repository.find_by_email(normalized_email)
        if user is None:
            raise NotFoundError()
        if account_state(user) is AccountState.VERIFIED:
            return False

        raw_token = generate_verification_token()
        replaced = self.repository.replace_verification_token(
            user.id,
            digest_verification_token(raw_token),
            self.clock() + self.verification_ttl,
        )
        if not replaced:
            # Verified (or deleted) between the lookup and the update
            return False

        self._send_verification(user, raw_token)
        return True

    def login(self, email: str, password: str) -> LoginResult:
        """
        Check credentials, then verification state, then mint a session.

        Raises:
            ValidationError: If email or password is missing
            InvalidCredentials: Unknown email or wrong password
            NotVerifiedError: Password correct but email not verified
        """
        normalized_email = normalize_email(email or "")
        if not normalized_email or not password:
            raise ValidationError("Email and password are required.")

        found = self.repository.find_credentials(normalized_email)
        if found is None:
            self.hasher.verify(password, _dummy_hash(self.hasher.rounds))
            raise InvalidCredentials()

        user, password_hash = found
        if not self.hasher.verify(password, password_hash):
            raise InvalidCredentials()
        if not user.email_verified:
            raise NotVerifiedError()

        return LoginResult(user=user, session=self.session_signer.issue(user))

    def current_user(self, user_id: str) -> User:
        user = self.repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError()
        return user

    def _send_verification(self, user: User, raw_token: str) -> None:
        verify_url = f"{self.verify_url_base.rstrip('/')}/{raw_token}"
        subject, html = verification_email(user.name, verify_url)
        self._notify(user.email, subject, html)

    def _notify(self, to: str, subject: str, html: str) -> None:
        try:
            self.notifier.send_email(to, subject, html)
        except Exception:
            logger.exception("Failed to dispatch email %r to %s", subject, to)
