import logging

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base
from .config import settings

logger = logging.getLogger(__name__)


def build_engine(url: str, echo: bool = False, ssl: bool = False, **kwargs):
    connect_args = {}
    if url.startswith("postgresql+asyncpg"):
        connect_args["server_settings"] = {"application_name": "taskcal"}
        if ssl:
            connect_args["ssl"] = "require"
    return create_async_engine(url, echo=echo, connect_args=connect_args, **kwargs)


engine = build_engine(
    settings.ASYNC_DATABASE_URL,
    echo=settings.SQL_ECHO,
    ssl=settings.DATABASE_SSL,
)

AsyncSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

Base = declarative_base()

async def init_models(bind=None):
    # registers the tables on Base.metadata
    from taskcal.models import task  # noqa: F401

    bind = bind or engine
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))
