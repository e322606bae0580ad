"""
Create the schools and students tables.

Run: python -m app.db.init_db
"""
import asyncio
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine

import app.core.models  # noqa: F401  (registers tables on Base.metadata)
from app.db.session import Base, engine

logger = logging.getLogger(__name__)


async def init_db(bind: Optional[AsyncEngine] = None) -> None:
    bind = bind or engine
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_db())
