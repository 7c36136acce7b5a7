"""Session token helpers."""

import hashlib
import hmac
import secrets

TOKEN_BYTES = 32


def generate_token() -> str:
    """Generate a URL-safe opaque session or OAuth state token."""
    return secrets.token_urlsafe(TOKEN_BYTES)


def hash_token(token: str, server_salt: str) -> str:
    """Return the sha256 digest stored in place of the raw token."""
    payload = f"{token}{server_salt}".encode()
    return hashlib.sha256(payload).hexdigest()


def tokens_match(left: str | None, right: str | None) -> bool:
    """Constant-time comparison that treats missing values as a mismatch."""
    if not left or not right:
        return False
    return hmac.compare_digest(left, right)
