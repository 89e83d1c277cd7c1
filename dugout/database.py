# dugout/database.py
from __future__ import annotations

import asyncio
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL
from sqlalchemy.engine.url import make_url
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

load_dotenv()

logger = logging.getLogger(__name__)

ASYNCPG_DRIVER = "postgresql+asyncpg"

# libpq sslmode -> asyncpg ssl flag; "prefer"/"allow" keep the driver default
_SSLMODE_TO_SSL = {
    "require": "true",
    "verify-ca": "true",
    "verify-full": "true",
    "disable": "false",
}


def _default_db_url() -> str:
    """File-based SQLite database next to the package, used when nothing else is configured."""
    root = Path(__file__).resolve().parents[1]
    return f"sqlite+aiosqlite:///{(root / 'dugout.db').as_posix()}"


def _translate_sslmode(value: str) -> Optional[str]:
    return _SSLMODE_TO_SSL.get(value.strip().lower())


def _render(url: URL) -> str:
    return url.render_as_string(hide_password=False)


def _normalize_database_url(raw_url: Optional[str]) -> Optional[str]:
    """Force the asyncpg driver for Postgres URLs and turn ``sslmode`` into ``ssl``."""

    if not raw_url:
        return raw_url

    try:
        url = make_url(raw_url)
    except Exception:
        return raw_url

    scheme = url.drivername.lower()
    if scheme in {"postgres", "postgresql"} or scheme.startswith("postgresql+"):
        url = url.set(drivername=ASYNCPG_DRIVER)
    else:
        return _render(url)

    params = dict(url.query)
    if "sslmode" in params:
        ssl = _translate_sslmode(params.pop("sslmode"))
        if ssl is not None:
            params["ssl"] = ssl
        url = url.set(query=params)
    return _render(url)


def _railway_env_database_url(env: Mapping[str, str]) -> Optional[str]:
    """Build a Postgres URL from the PG* variables hosting platforms export."""

    if not all(env.get(key) for key in ("PGHOST", "PGDATABASE", "PGUSER")):
        return None

    try:
        port = int(env["PGPORT"]) if env.get("PGPORT") else None
    except (TypeError, ValueError):
        port = None

    ssl = _translate_sslmode(env["PGSSLMODE"]) if env.get("PGSSLMODE") else None
    return _render(URL.create(
        drivername=ASYNCPG_DRIVER,
        username=env["PGUSER"],
        password=env.get("PGPASSWORD") or None,
        host=env["PGHOST"],
        port=port,
        database=env["PGDATABASE"],
        query={"ssl": ssl} if ssl else {},
    ))


def _apply_pgsslmode(database_url: str, sslmode: Optional[str]) -> str:
    """Add ``ssl`` from PGSSLMODE unless the URL already carries one."""

    ssl = _translate_sslmode(sslmode) if sslmode else None
    if ssl is None:
        return database_url
    url = make_url(database_url)
    if url.drivername != ASYNCPG_DRIVER or "ssl" in url.query:
        return database_url
    return _render(url.update_query_dict({"ssl": ssl}))


def _database_url_from_env(env: Mapping[str, str]) -> Optional[str]:
    """DATABASE_URL, then POSTGRES_URL, then the PG* variables."""

    for key in ("DATABASE_URL", "POSTGRES_URL"):
        normalized = _normalize_database_url(env.get(key))
        if normalized:
            return _apply_pgsslmode(normalized, env.get("PGSSLMODE"))

    return _railway_env_database_url(env)


DEFAULT_SQLITE_URL: str = _default_db_url()
DATABASE_URL: str = _database_url_from_env(os.environ) or DEFAULT_SQLITE_URL

ECHO = os.getenv("SQLALCHEMY_ECHO", "0").lower() in {"1", "true", "yes"}


def _build_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(
        database_url,
        echo=ECHO,
        pool_pre_ping=True,
    )


def build_session_factory(bind_engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(
        bind=bind_engine,
        class_=AsyncSession,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC "now"; every DateTime column stores naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


engine: AsyncEngine
SessionLocal: sessionmaker
CURRENT_DATABASE_URL: str


def configure_engine(database_url: str) -> None:
    """(Re)configure the global engine/session factory pair.

    Startup uses this to fall back to the bundled SQLite database when a
    configured Postgres instance never becomes reachable.
    """

    global engine, SessionLocal, CURRENT_DATABASE_URL

    engine = _build_engine(database_url)
    SessionLocal = build_session_factory(engine)
    CURRENT_DATABASE_URL = database_url


configure_engine(DATABASE_URL)


async def get_db():
    """FastAPI dependency that yields an AsyncSession."""

    async with SessionLocal() as session:
        yield session


async def init_models(bind_engine: Optional[AsyncEngine] = None) -> None:
    """Import every model module so it registers with Base, then create tables."""

    import dugout.models  # noqa: F401

    target = bind_engine or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def _sqlite_fallback_allowed() -> bool:
    return os.getenv("DB_ALLOW_SQLITE_FALLBACK", "").lower() in {"1", "true", "yes", "on"}


async def ensure_database(max_attempts: int = 10, base_delay: float = 1.0) -> None:
    """Create tables, retrying with capped exponential backoff while the server comes up.

    After ``max_attempts`` failures the engine is swapped for the local SQLite
    file when ``DB_ALLOW_SQLITE_FALLBACK`` permits it; otherwise the last
    error propagates and startup fails.
    """

    for attempt in range(1, max_attempts + 1):
        try:
            await init_models()
            return
        except (OperationalError, DBAPIError, OSError) as exc:
            if attempt == max_attempts:
                if _sqlite_fallback_allowed() and CURRENT_DATABASE_URL != DEFAULT_SQLITE_URL:
                    logger.error("Database unreachable after %s attempts (%s); using local SQLite", attempt, exc)
                    await engine.dispose()
                    configure_engine(DEFAULT_SQLITE_URL)
                    await init_models()
                    return
                logger.exception("Database unreachable after %s attempts", attempt)
                raise
            delay = base_delay * min(2 ** (attempt - 1), 8)
            logger.warning(
                "Database not ready (attempt %s/%s): %s; retrying in %.1fs", attempt, max_attempts, exc, delay
            )
            await asyncio.sleep(delay)
