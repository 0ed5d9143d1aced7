import asyncio
import logging
from sqlalchemy import text
from app.core.config import settings
from app.db.session import engine, Base

logger = logging.getLogger("wager_ledger.db")


async def wait_for_db(retries=None, delay=None):
    retries = settings.DB_CONNECT_RETRIES if retries is None else retries
    delay = settings.DB_RETRY_DELAY if delay is None else delay

    for i in range(retries):
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Connected to database")
            return
        except Exception as e:
            logger.warning("Database not ready | [ %d/%d ] %s → retrying...", i + 1, retries, e)
            await asyncio.sleep(delay)

    raise RuntimeError("Database unreachable after retries")


async def create_tables():
    # SQLite has no migrations run against it; build the schema from the models
    from app.models import user, bet, poker_session, poker_player  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
