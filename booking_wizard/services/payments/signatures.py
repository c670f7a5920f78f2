"""
Webhook signature helpers.
"""

import base64
import binascii
import hashlib
import hmac
import time
from typing import Optional

from ...utils.logging import get_logger

logger = get_logger(__name__)

# Maximum age of a signed webhook in seconds (5 minutes)
MAX_WEBHOOK_AGE_SECONDS = 300


def constant_time_compare(a: str, b: str) -> bool:
    """Compare two strings in constant time."""
    if not a or not b:
        return False
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def compute_hmac_sha256(secret: str, payload: bytes) -> str:
    """Hex HMAC-SHA256 of ``payload``."""
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def compute_hmac_sha256_base64(key: bytes, payload: bytes) -> str:
    """Base64 HMAC-SHA256 of ``payload``."""
    digest = hmac.new(key, payload, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("utf-8")


def standard_webhooks_key(secret: str) -> bytes:
    """Signing key bytes for a ``whsec_``-style Standard Webhooks secret.

    The part after ``whsec_`` is base64; secrets that do not decode are used
    as raw UTF-8 bytes.
    """
    encoded = secret[6:] if secret.startswith("whsec_") else secret
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return secret.encode("utf-8")


def verify_timestamp(
    timestamp: Optional[str],
    max_age: int = MAX_WEBHOOK_AGE_SECONDS,
    now: Optional[float] = None,
) -> bool:
    """Check that a unix ``timestamp`` lies within ``max_age`` seconds of now."""
    if not timestamp:
        return False
    try:
        sent_at = int(timestamp)
    except (ValueError, TypeError):
        logger.warning("Invalid webhook timestamp format: %s", timestamp)
        return False

    current = int(now if now is not None else time.time())
    age = abs(current - sent_at)
    if age > max_age:
        logger.warning("Webhook timestamp too old: %ss (max: %ss)", age, max_age)
        return False
    return True
