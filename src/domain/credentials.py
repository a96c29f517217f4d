"""
Credential primitives - password hashing and verification tokens.

Passwords go through bcrypt (slow, salted per call). Verification tokens
are random values whose SHA-256 digest is the only form ever stored: a
digest has no per-call salt because it must be found by exact match.
"""

import hashlib
import secrets
from dataclasses import dataclass

import bcrypt

# 32 bytes = 256 bits of entropy, hex-encoded to 64 characters
TOKEN_BYTES = 32
MIN_BCRYPT_COST = 12
# bcrypt only reads the first 72 bytes; newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class PasswordHasher:
    """bcrypt wrapper with a fixed work factor."""

    rounds: int = MIN_BCRYPT_COST

    def __post_init__(self) -> None:
        if self.rounds < MIN_BCRYPT_COST:
            raise ValueError(f"bcrypt cost must be at least {MIN_BCRYPT_COST}")

    def hash(self, password: str) -> str:
        """Hash with a freshly generated salt."""
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, stored_hash: str) -> bool:
        """
        Constant-time password check via bcrypt.checkpw.

        A stored value that is not a bcrypt hash counts as a mismatch.
        """
        try:
            return bcrypt.checkpw(password.encode(), stored_hash.encode())
        except ValueError:
            return False


def generate_verification_token() -> str:
    """Return a new raw token. Shown once, sent only by email."""
    return secrets.token_hex(TOKEN_BYTES)


def digest_verification_token(raw_token: str) -> str:
    """Deterministic SHA-256 hex digest of a raw token."""
    return hashlib.sha256(raw_token.encode()).hexdigest()
