"""
Shared transaction handling for write services
"""

from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from cmscore.core.exceptions import CMSException, PersistenceException

logger = logging.getLogger(__name__)


class TransactionalService:
    """Base for services whose public writes each run as one transaction"""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _unit_of_work(self, operation: str):
        """Commit on success; roll everything back on any failure"""
        try:
            yield
            await self.db.commit()
        except CMSException:
            await self.db.rollback()
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to {operation}: {str(e)}")
            raise PersistenceException(operation) from e
