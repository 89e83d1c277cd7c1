import logging
import os

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from dugout.auth_token import (
    Principal,
    clear_session_cookie,
    create_access_token,
    get_current_user,
    revoke_token,
    set_session_cookie,
)
from dugout.crud import commit_or_fail, ok, serialize
from dugout.csrf import issue_csrf_token
from dugout.database import get_db, utcnow
from dugout.errors import ApiError, AuthenticationError, BadRequestError
from dugout.models.team import Team
from dugout.models.user import User
from dugout.rate_limiter import get_login_rate_limiter
from dugout.schemas import UserLogin, UserProfile, UserRegister
from dugout.security import hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


async def _registration_team_id(db: AsyncSession):
    configured = os.getenv("DEFAULT_TEAM_ID")
    if configured:
        try:
            team_id = int(configured)
        except ValueError:
            logger.warning("DEFAULT_TEAM_ID is not an integer; ignoring it")
        else:
            exists = await db.execute(select(Team.id).where(Team.id == team_id))
            if exists.scalar_one_or_none() is not None:
                return team_id
    return (await db.execute(select(func.min(Team.id)))).scalar_one_or_none()


async def _load_user(db: AsyncSession, user_id: int) -> User:
    result = await db.execute(
        select(User).where(User.id == user_id).execution_options(populate_existing=True)
    )
    return result.scalar_one()


@router.get("/csrf-token")
async def csrf_token(response: Response):
    token = issue_csrf_token(response)
    return {"success": True, "token": token}


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: UserRegister, response: Response, db: AsyncSession = Depends(get_db)):
    email = payload.email.lower()
    existing = await db.execute(select(User.id).where(func.lower(User.email) == email))
    if existing.scalar_one_or_none() is not None:
        raise BadRequestError("User already exists with this email")

    team_id = await _registration_team_id(db)
    if team_id is None:
        logger.error("Registration attempted but no team exists")
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "No team configured for registration")

    user = User(
        email=email,
        password_hash=hash_password(payload.password),
        first_name=payload.first_name,
        last_name=payload.last_name,
        role=payload.role,
        phone=payload.phone,
        team_id=team_id,
    )
    db.add(user)
    await commit_or_fail(db, "Error registering user")
    user = await _load_user(db, user.id)

    token = create_access_token({"user_id": user.id})
    set_session_cookie(response, token)
    logger.info("Registered user %s in team %s", user.id, team_id)
    return ok(
        {"user": serialize(UserProfile, user), "token": token},
        message="User registered successfully",
    )


@router.post("/login")
async def login(
    payload: UserLogin,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
    limiter=Depends(get_login_rate_limiter),
):
    email = payload.email.lower()
    client = request.client.host if request.client else "unknown"
    limiter_key = f"{client}:{email}"
    if limiter is not None:
        if not await limiter.try_acquire(limiter_key):
            logger.warning("Login rate limit hit for %s", email)
            raise ApiError(
                status.HTTP_429_TOO_MANY_REQUESTS,
                "Too many login attempts. Please try again later.",
            )

    result = await db.execute(select(User).where(func.lower(User.email) == email))
    user = result.scalar_one_or_none()

    if not verify_password(payload.password, user.password_hash if user else None):
        raise AuthenticationError("Invalid credentials")
    if not user.is_active:
        raise AuthenticationError("Account is deactivated")
    if limiter is not None:
        await limiter.reset(limiter_key)

    user.last_login = utcnow()
    try:
        await db.commit()
    except SQLAlchemyError:
        # a failed last_login write must not block the login itself
        await db.rollback()
        logger.exception("Could not record last_login for user %s", user.id)
    user = await _load_user(db, user.id)

    token = create_access_token({"user_id": user.id})
    set_session_cookie(response, token)
    return ok({"user": serialize(UserProfile, user), "token": token}, message="Login successful")


@router.get("/me")
async def me(current: Principal = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    user = await _load_user(db, current.id)
    data = serialize(UserProfile, user)
    data["permissions"] = sorted(p.value for p in current.permissions)
    return ok(data)


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    current: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    payload = getattr(request.state, "token_payload", None) or {}
    await revoke_token(db, payload)
    await commit_or_fail(db, "Error logging out")
    clear_session_cookie(response)
    logger.info("User %s logged out", current.id)
    return ok(message="Logged out successfully")
