import asyncio
import logging
import os

from sqlalchemy import select

import dugout.database as database
from dugout.models import PermissionType, Team, User, UserPermission
from dugout.security import hash_password

logger = logging.getLogger(__name__)


async def seed(session, *, team_name: str, email: str, password: str) -> User:
    """Ensure a first team and a super admin holding every permission exist."""

    team = (await session.execute(select(Team).where(Team.name == team_name))).scalar_one_or_none()
    if team is None:
        team = Team(name=team_name)
        session.add(team)
        await session.flush()

    admin = (await session.execute(select(User).where(User.email == email.lower()))).scalar_one_or_none()
    if admin is None:
        admin = User(
            email=email.lower(),
            password_hash=hash_password(password),
            first_name="Team",
            last_name="Admin",
            role="super_admin",
            team_id=team.id,
        )
        session.add(admin)
        await session.flush()

    held = set(
        (
            await session.execute(
                select(UserPermission.permission_type).where(
                    UserPermission.user_id == admin.id, UserPermission.team_id == team.id
                )
            )
        ).scalars().all()
    )
    for permission in PermissionType:
        if permission not in held:
            session.add(UserPermission(user_id=admin.id, team_id=team.id, permission_type=permission))

    await session.commit()
    return admin


async def main() -> None:
    await database.init_models()
    async with database.SessionLocal() as session:
        admin = await seed(
            session,
            team_name=os.getenv("SEED_TEAM_NAME", "Default Team"),
            email=os.getenv("SEED_ADMIN_EMAIL", "admin@dugout.app"),
            password=os.getenv("SEED_ADMIN_PASSWORD", "change-me-now"),
        )
    logger.info("Seeded team %s with admin user %s.", admin.team_id, admin.id)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
