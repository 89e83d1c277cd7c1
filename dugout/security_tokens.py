"""Random tokens and HMAC signatures for the CSRF cookie."""

import hashlib
import hmac
import secrets
from typing import Optional


def generate_token(nbytes: int = 32) -> str:
    # URL-safe base64 without padding, so it never contains "."
    return secrets.token_urlsafe(nbytes)


def sign_token(token: str, secret: str) -> str:
    """Hex HMAC-SHA256 of ``token`` keyed by ``secret``."""
    return hmac.new(secret.encode("utf-8"), token.encode("utf-8"), hashlib.sha256).hexdigest()


def constant_time_equals(a: Optional[str], b: Optional[str]) -> bool:
    return hmac.compare_digest((a or "").encode("utf-8"), (b or "").encode("utf-8"))
