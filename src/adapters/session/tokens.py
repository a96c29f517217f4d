"""
JWT session signer - Implements SessionSigner protocol with python-jose.

Credentials are HS256 tokens carrying the user id (sub), email and name.
They are stateless: nothing is stored server-side, so a credential stays
valid until its exp claim even after the cookie is cleared.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from src.domain.exceptions import Unauthorized, UnauthorizedReason
from src.domain.ports import SessionCredential, SessionIdentity, User

logger = logging.getLogger(__name__)

SESSION_TTL = timedelta(days=1)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JwtSessionSigner:
    """
    Implements SessionSigner protocol via python-jose.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = SESSION_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("Session signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    def issue(self, user: User) -> SessionCredential:
        """Sign a credential for user, valid for the configured TTL."""
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self._ttl
        claims = {
            "sub": user.id,
            "email": user.email,
            "name": user.name,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(claims, self._secret, algorithm=self._algorithm)
        return SessionCredential(token=token, expires_at=expires_at)

    def decode(self, token: str) -> SessionIdentity:
        """
        Verify signature and expiry, then return the identity claims.

        Raises:
            Unauthorized: EXPIRED past exp, MALFORMED for anything else
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            raise Unauthorized(UnauthorizedReason.EXPIRED) from None
        except JWTError as e:
            logger.debug("Rejected session credential: %s", e)
            raise Unauthorized(UnauthorizedReason.MALFORMED) from None

        try:
            return SessionIdentity(
                user_id=str(claims["sub"]),
                email=claims["email"],
                name=claims["name"],
                issued_at=datetime.fromtimestamp(claims["iat"], timezone.utc),
                expires_at=datetime.fromtimestamp(claims["exp"], timezone.utc),
            )
        except (KeyError, TypeError, ValueError):
            raise Unauthorized(UnauthorizedReason.MALFORMED) from None
