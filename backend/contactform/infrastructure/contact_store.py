"""Contact Store - durable single-table persistence behind one writer lock.

Invariants:
    - At most one insert or schema operation runs at a time (asyncio.Lock);
      concurrent requests queue on the lock instead of interleaving
    - The lock is held only around the statement itself, released on every
      exit path (async with), including errors
    - Every failed statement is rolled back, logged with detail, and
      re-raised as StorageError (whose public message carries no detail)
    - No retries, no in-memory cache of stored rows

Design Decisions:
    - One store per process, built at startup and handed to routes through
      AppContext rather than a module-level singleton
    - expire_on_commit=False: the new id is readable after commit without a reload
"""

import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from contactform.core.domain_types import ContactSubmission, RecordId
from contactform.core.errors import StorageError
from contactform.db.base import Base
from contactform.models.contact import ContactRecord

logger = logging.getLogger(__name__)


class ContactStore:
    """Appends validated submissions to the contacts table."""

    def __init__(self, database_url: str):
        self.engine = create_async_engine(database_url, pool_pre_ping=True)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._lock = asyncio.Lock()

    async def init_schema(self) -> None:
        """Create the contacts table if it does not exist yet."""
        async with self._lock:
            try:
                async with self.engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
            except SQLAlchemyError as e:
                logger.error(
                    f"Schema creation failed: {e}",
                    extra={"operation": "init_schema"},
                )
                raise StorageError("init_schema") from e

    async def insert(self, submission: ContactSubmission) -> RecordId:
        """Store one submission as-is. Trusts the caller to have validated it."""
        record = ContactRecord(
            name=submission.name,
            email=submission.email,
            subject=submission.subject,
            message=submission.message,
        )
        async with self._lock:
            async with self._session_factory() as session:
                try:
                    session.add(record)
                    await session.commit()
                except SQLAlchemyError as e:
                    await session.rollback()
                    logger.error(
                        f"Database error: {e}",
                        extra={"operation": "insert"},
                    )
                    raise StorageError("insert") from e
        logger.info(
            "Contact form stored", extra={"record_id": record.id},
        )
        return RecordId(record.id)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
