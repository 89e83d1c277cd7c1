import sys
from contextlib import asynccontextmanager
from datetime import timedelta
from pathlib import Path

import httpx
import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from dugout.auth_token import create_access_token
from dugout.database import build_session_factory, get_db, init_models, utcnow
from dugout.main import app
from dugout.models import Player, Team, User, UserPermission
from dugout.models.user_permission import PermissionType
from dugout.rate_limiter import get_login_rate_limiter
from dugout.security import hash_password

DEFAULT_PASSWORD = "Secret123!"


class Harness:
    """A client bound to a fresh in-memory database plus row factories."""

    def __init__(self, session_factory, client: httpx.AsyncClient) -> None:
        self.session_factory = session_factory
        self.client = client
        self._csrf = None

    async def make_team(self, name: str = "Bulldogs", **fields) -> Team:
        async with self.session_factory() as session:
            team = Team(name=name, **fields)
            session.add(team)
            await session.commit()
            return team

    async def make_user(
        self,
        team: Team,
        *,
        email: str = "coach@example.com",
        role: str = "head_coach",
        permissions=(),
        expired=(),
        is_active: bool = True,
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        async with self.session_factory() as session:
            user = User(
                email=email,
                password_hash=hash_password(password),
                first_name="Pat",
                last_name="Coach",
                role=role,
                team_id=team.id,
                is_active=is_active,
            )
            session.add(user)
            await session.flush()
            for permission in permissions:
                session.add(UserPermission(user_id=user.id, team_id=team.id, permission_type=permission))
            for permission in expired:
                session.add(UserPermission(
                    user_id=user.id,
                    team_id=team.id,
                    permission_type=permission,
                    expires_at=utcnow() - timedelta(days=1),
                ))
            await session.commit()
            return user

    async def make_player(self, team: Team, user: User, **fields) -> Player:
        values = {"first_name": "Sam", "last_name": "Slugger", "school_type": "HS", "position": "SS"}
        values.update(fields)
        async with self.session_factory() as session:
            player = Player(team_id=team.id, created_by=user.id, **values)
            session.add(player)
            await session.commit()
            return player

    async def csrf_headers(self) -> dict:
        """Fetch a CSRF token once; the client keeps the paired cookie."""
        if self._csrf is None:
            response = await self.client.get("/api/v1/auth/csrf-token")
            self._csrf = response.json()["token"]
        return {"x-csrf-token": self._csrf}

    async def headers(self, user: User = None) -> dict:
        headers = await self.csrf_headers()
        if user is not None:
            headers["Authorization"] = f"Bearer {create_access_token({'user_id': user.id})}"
        return headers

    async def get(self, url: str, user: User = None, **kwargs):
        return await self.client.get(url, headers=await self.headers(user), **kwargs)

    async def post(self, url: str, user: User = None, **kwargs):
        return await self.client.post(url, headers=await self.headers(user), **kwargs)

    async def put(self, url: str, user: User = None, **kwargs):
        return await self.client.put(url, headers=await self.headers(user), **kwargs)

    async def delete(self, url: str, user: User = None, **kwargs):
        return await self.client.delete(url, headers=await self.headers(user), **kwargs)


@pytest.fixture
def harness():
    """Usage: ``async with harness() as h: ...`` inside ``asyncio.run``."""

    @asynccontextmanager
    async def _open(rate_limiter=None):
        engine = create_async_engine(
            "sqlite+aiosqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        await init_models(engine)
        session_factory = build_session_factory(engine)

        async def _get_db():
            async with session_factory() as session:
                yield session

        app.dependency_overrides[get_db] = _get_db
        app.dependency_overrides[get_login_rate_limiter] = lambda: rate_limiter
        transport = httpx.ASGITransport(app=app)
        try:
            async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
                yield Harness(session_factory, client)
        finally:
            app.dependency_overrides.clear()
            await engine.dispose()

    return _open
