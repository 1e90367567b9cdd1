from collections.abc import AsyncGenerator
from typing import Any, Dict
from sqlalchemy.engine.url import make_url, URL
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from ferreteria.core.settings import settings

raw: str = settings.DATABASE_URL.get_secret_value()

u = make_url(raw)

connect_args: Dict[str, Any] = {}
engine_opts: Dict[str, Any] = {}

if u.get_backend_name() == "postgresql":
    # sin query string: sslmode/channel_binding no los entiende asyncpg
    clean_url: URL = URL.create(
        drivername="postgresql+asyncpg",
        username=u.username,
        password=u.password,
        host=u.host,
        port=u.port,
        database=u.database,
    )
    connect_args = {"ssl": settings.DB_SSL, "statement_cache_size": 0}
    engine_opts = {"execution_options": {"isolation_level": "READ COMMITTED"}}
else:
    clean_url = u

engine = create_async_engine(
    clean_url.render_as_string(hide_password=False),
    echo=bool(getattr(settings, "DEBUG", False)),
    poolclass=NullPool,
    pool_pre_ping=True,
    connect_args=connect_args,
    **engine_opts,
)

async_session = async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False, class_=AsyncSession)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    session: AsyncSession = async_session()
    try:
        yield session
    finally:
        await session.close()

async def create_all() -> None:
    from ferreteria.v1_0.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

async def dispose_engine() -> None:
    await engine.dispose()
