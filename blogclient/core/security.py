# blogclient/core/security.py
"""
Password hashing, session token generation and device descriptors.

Passwords are stored as a SHA-256 hex digest and compared digest to
digest; tokens are 32 random bytes from `secrets`, hex-encoded.
"""

import hashlib
import hmac
import secrets
from datetime import datetime, timezone

TOKEN_BYTES = 32


def hash_password(password: str) -> str:
    """
    Create the SHA-256 digest of a password.

    Deterministic: the same password always yields the same 64-char
    lowercase hex digest.
    """
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_password(password: str, digest: str) -> bool:
    """Compare hash(password) against a stored digest in constant time."""
    return hmac.compare_digest(hash_password(password), digest)


def generate_token(length: int = TOKEN_BYTES) -> str:
    """
    Generate a cryptographically secure random session token.

    Args:
        length: Number of random bytes (output is hex, so 2x length)
    """
    return secrets.token_hex(length)


def device_info(platform: str) -> dict[str, str]:
    """Opaque device descriptor stored with each session."""
    return {
        "platform": platform,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
