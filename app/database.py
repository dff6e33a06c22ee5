import logging

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from app.config import settings

logger = logging.getLogger(__name__)

# Ensure we use the async driver
SQLALCHEMY_DATABASE_URL = settings.database_url.replace("postgresql://", "postgresql+asyncpg://")

engine = create_async_engine(SQLALCHEMY_DATABASE_URL, echo=False)

# Async session factory
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)

Base = declarative_base()

# Integer primary keys are int4 on Postgres
MAX_ID = 2**31 - 1

async def get_db():
    async with AsyncSessionLocal() as db:
        try:
            yield db
        except Exception:
            # Nothing half-written survives a failed request
            await db.rollback()
            raise
        finally:
            await db.close()


async def create_tables():
    # Import models so they register on Base.metadata
    from app.models import user, category, tasks  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")
