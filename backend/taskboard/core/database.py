from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from .config import settings


def connect_args_for(config):
    if not config.ASYNC_DATABASE_URL.startswith("postgresql+asyncpg"):
        return {}
    connect_args = {"server_settings": {"application_name": "taskboard"}}
    ssl_mode = config.database_ssl_mode
    if ssl_mode:
        connect_args["ssl"] = ssl_mode
    return connect_args


engine = create_async_engine(
    settings.ASYNC_DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    pool_pre_ping=True,
    connect_args=connect_args_for(settings),
)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

Base = declarative_base()

async def get_db():
    async with AsyncSessionLocal() as session:
        yield session
