from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.schema import CreateIndex, CreateTable

from preinscription.platform.db.base import Base
from preinscription.platform.logger import get_logger

# Registers the tables on Base.metadata
from preinscription.features.signup.models import preinscription  # noqa: F401

logger = get_logger(__name__)


async def ensure_schema(engine: AsyncEngine) -> None:
    """
    Create every table and index if it does not exist yet.

    Indexes are issued on their own so they are added to tables that
    already existed without them. Safe to run on every start.
    """
    async with engine.begin() as conn:
        for table in Base.metadata.sorted_tables:
            await conn.execute(CreateTable(table, if_not_exists=True))
            for index in sorted(table.indexes, key=lambda i: i.name):
                await conn.execute(CreateIndex(index, if_not_exists=True))

    logger.info("Database schema ready")
