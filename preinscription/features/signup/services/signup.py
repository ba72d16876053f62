from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from preinscription.features.signup.models.preinscription import Preinscription
from preinscription.platform.logger import get_logger

logger = get_logger(__name__)


class SignupService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Preinscription))
        return int(result.scalar_one())

    def _insert_ignoring_duplicates(self, values: dict):
        dialect = self.db.bind.dialect.name
        if dialect == "postgresql":
            return (
                pg_insert(Preinscription)
                .values(**values)
                .on_conflict_do_nothing(index_elements=[func.lower(Preinscription.email)])
            )
        if dialect == "sqlite":
            return sqlite_insert(Preinscription).values(**values).on_conflict_do_nothing()
        raise RuntimeError(f"Unsupported database dialect: {dialect}")

    async def register(
        self,
        email: str,
        country: Optional[str] = None,
        interest: Optional[str] = None,
        lang: Optional[str] = None,
    ) -> int:
        """
        Store a signup unless the address is already known, then return the
        total number of signups.

        ``email`` must already be normalized. A duplicate is not an error:
        the insert is skipped and the current count is returned.
        """
        stmt = self._insert_ignoring_duplicates(
            {"email": email, "country": country, "interest": interest, "lang": lang}
        )
        try:
            result = await self.db.execute(stmt)
            if result.rowcount == 0:
                logger.info("Duplicate signup ignored")
            total = await self.count()
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return total
