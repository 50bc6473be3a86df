import asyncio
import logging
from sqlalchemy.ext.asyncio import create_async_engine
from garage_crm.config import get_settings, setup_logging
from garage_crm.models.crm_models import Base

logger = logging.getLogger(__name__)

async def create_tables(database_url: str):
    engine = create_async_engine(database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    logger.info(f"Created tables {sorted(Base.metadata.tables)} in {database_url}")

if __name__ == "__main__":
    settings = get_settings()
    setup_logging(settings)
    asyncio.run(create_tables(settings.database_url))
