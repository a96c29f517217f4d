"""Session adapters - Signed session credential implementations."""

from .tokens import JwtSessionSigner

__all__ = ["JwtSessionSigner"]
