import os
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import FrozenSet, Optional

from dotenv import load_dotenv
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.database import get_db, utcnow
from dugout.errors import AuthenticationError
from dugout.models.token_blacklist import TokenBlacklist
from dugout.models.user import User
from dugout.models.user_permission import PermissionType, UserPermission

load_dotenv()

SECRET_KEY = os.getenv("JWT_SECRET", "dev-secret-change-me")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
EXPIRY_MINUTES = int(os.getenv("JWT_EXPIRY_MINUTES", "480"))
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "dugout_session")
SECURE_COOKIES = os.getenv("APP_ENV", "development").lower() == "production"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller and the grants that are live for this request."""

    id: int
    team_id: Optional[int]
    role: str
    email: str
    first_name: str = ""
    last_name: str = ""
    permissions: FrozenSet[PermissionType] = field(default_factory=frozenset)
    expired_permissions: FrozenSet[PermissionType] = field(default_factory=frozenset)


def create_access_token(data: dict) -> str:
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    to_encode.update({
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": now + timedelta(minutes=EXPIRY_MINUTES),
    })
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Decode and verify ``token``; raises ``JWTError`` on any failure."""
    return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])


def set_session_cookie(response, token: str) -> None:
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        max_age=EXPIRY_MINUTES * 60,
        httponly=True,
        secure=SECURE_COOKIES,
        samesite="strict" if SECURE_COOKIES else "lax",
        path="/",
    )


def clear_session_cookie(response) -> None:
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")


def extract_token(request: Request, bearer: Optional[str]) -> Optional[str]:
    """Bearer header wins; the session cookie is the fallback."""
    return bearer or request.cookies.get(SESSION_COOKIE_NAME)


async def is_token_revoked(db: AsyncSession, jti: str) -> bool:
    result = await db.execute(select(TokenBlacklist.id).where(TokenBlacklist.jti == jti))
    return result.scalar_one_or_none() is not None


async def revoke_token(db: AsyncSession, payload: dict, reason: str = "logout") -> None:
    jti = payload.get("jti")
    if not jti or await is_token_revoked(db, jti):
        return
    exp = payload.get("exp")
    expires_at = (
        datetime.fromtimestamp(exp, tz=timezone.utc).replace(tzinfo=None)
        if exp is not None else utcnow()
    )
    db.add(TokenBlacklist(
        jti=jti,
        user_id=payload.get("user_id"),
        expires_at=expires_at,
        reason=reason,
    ))


async def load_principal(db: AsyncSession, user_id: int) -> Optional[Principal]:
    """Fetch an active user together with its grants for the user's own team."""

    rows = (
        await db.execute(
            select(User, UserPermission)
            .outerjoin(
                UserPermission,
                and_(
                    UserPermission.user_id == User.id,
                    UserPermission.team_id == User.team_id,
                    UserPermission.is_granted.is_(True),
                ),
            )
            .where(User.id == user_id)
        )
    ).all()

    if not rows:
        return None
    user = rows[0][0]
    if not user.is_active:
        return None

    now = utcnow()
    granted = set()
    expired = set()
    for _, grant in rows:
        if grant is None:
            continue
        if grant.expires_at is not None and grant.expires_at <= now:
            expired.add(grant.permission_type)
        else:
            granted.add(grant.permission_type)

    return Principal(
        id=user.id,
        team_id=user.team_id,
        role=user.role,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        permissions=frozenset(granted),
        expired_permissions=frozenset(expired - granted),
    )


async def get_current_user(
    request: Request,
    bearer: Optional[str] = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> Principal:
    token = extract_token(request, bearer)
    if not token:
        raise AuthenticationError("Not authorized, no token")

    try:
        payload = decode_access_token(token)
    except JWTError:
        raise AuthenticationError("Not authorized")

    user_id = payload.get("user_id")
    if not user_id:
        raise AuthenticationError("Not authorized")

    jti = payload.get("jti")
    if jti and await is_token_revoked(db, jti):
        raise AuthenticationError("Not authorized")

    principal = await load_principal(db, user_id)
    if principal is None:
        raise AuthenticationError("User not found")

    request.state.token_payload = payload
    return principal
