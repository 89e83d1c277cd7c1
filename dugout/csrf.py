"""Stateless double-submit CSRF protection.

``issue_csrf_token`` hands the client a random token and stores
``token.issued_at.signature`` in an HTTP-only cookie. Mutating requests must
echo the token in the ``x-csrf-token`` header; the middleware accepts them
only when the cookie's signature verifies, it was issued less than
``CSRF_TOKEN_TTL`` seconds ago and its token equals the header. Tokens are
not single-use inside that window.
"""

import logging
import os
import time
from typing import Optional

from dotenv import load_dotenv
from fastapi import Request, Response
from fastapi.responses import JSONResponse

from dugout.errors import CsrfError
from dugout.security_tokens import constant_time_equals, generate_token, sign_token

load_dotenv()

logger = logging.getLogger(__name__)

CSRF_SECRET = os.getenv("CSRF_SECRET", "dev-csrf-secret-change-me")
CSRF_HEADER_NAME = "x-csrf-token"
# signed cookies older than this are refused even if the browser still sends them
CSRF_TOKEN_TTL = int(os.getenv("CSRF_TOKEN_TTL_SECONDS", str(8 * 60 * 60)))
CLOCK_SKEW_SECONDS = 60
SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


def _is_production() -> bool:
    return os.getenv("APP_ENV", "development").lower() == "production"


def csrf_cookie_name() -> str:
    # __Host- requires Secure, so the prefix is only used where cookies are Secure.
    return "__Host-dugout.x-csrf-token" if _is_production() else "dugout.x-csrf-token"


def _signed_value(token: str, issued_at: int) -> str:
    payload = f"{token}.{issued_at}"
    return f"{payload}.{sign_token(payload, CSRF_SECRET)}"


def unsign_cookie(value: Optional[str]) -> Optional[str]:
    """Return the token inside a signed cookie value, or None if it does not verify or has expired."""
    if not value or value.count(".") != 2:
        return None
    payload, _, signature = value.rpartition(".")
    if not constant_time_equals(signature, sign_token(payload, CSRF_SECRET)):
        return None
    token, _, issued = payload.partition(".")
    try:
        age = time.time() - int(issued)
    except ValueError:
        return None
    if not token or age > CSRF_TOKEN_TTL or age < -CLOCK_SKEW_SECONDS:
        return None
    return token


def issue_csrf_token(response: Response) -> str:
    token = generate_token()
    production = _is_production()
    response.set_cookie(
        csrf_cookie_name(),
        _signed_value(token, int(time.time())),
        max_age=CSRF_TOKEN_TTL,
        httponly=True,
        secure=production,
        samesite="strict" if production else "lax",
        path="/",
    )
    return token


def is_valid_request(request: Request) -> bool:
    header = request.headers.get(CSRF_HEADER_NAME)
    if not header:
        return False
    token = unsign_cookie(request.cookies.get(csrf_cookie_name()))
    if token is None:
        return False
    return constant_time_equals(header, token)


async def csrf_middleware(request: Request, call_next):
    if request.method.upper() in SAFE_METHODS or is_valid_request(request):
        return await call_next(request)

    logger.warning("CSRF validation failed for %s %s", request.method, request.url.path)
    exc = CsrfError()
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())
