"""
Endpoint Registry — ApiEndpoint Repository
============================================

What:  Storage operations on the `api_endpoints` table.
How:   Each method runs against the request's AsyncSession and flushes writes
       immediately, so constraint violations surface here (not at commit time
       in the session dependency) and can be translated.

Error translation:
    IntegrityError from a unique constraint → UniqueConstraintViolation
    Any other SQLAlchemyError               → StorageError

    Unique violations are recognized from the driver error itself:
    SQLSTATE 23505 on PostgreSQL (asyncpg/psycopg), the "UNIQUE constraint
    failed" message on SQLite.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from endpoint_registry.exceptions import StorageError, UniqueConstraintViolation
from endpoint_registry.models.api_endpoint import ApiEndpoint

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when an IntegrityError was raised by a unique constraint."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE
    return "unique constraint" in str(orig).lower()


class EndpointRepository:
    """
    Data-access client for ApiEndpoint records.

    The repository never commits; the session dependency owns the
    transaction boundary.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_many(self) -> List[ApiEndpoint]:
        """All records, newest first."""
        try:
            result = await self.session.execute(
                select(ApiEndpoint).order_by(desc(ApiEndpoint.created_at))
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise StorageError("find_many", original=e) from e

    async def find_unique(self, endpoint_id: uuid.UUID) -> Optional[ApiEndpoint]:
        """The record with this primary key, or None."""
        try:
            return await self.session.get(ApiEndpoint, endpoint_id)
        except SQLAlchemyError as e:
            raise StorageError("find_unique", original=e) from e

    async def create(self, endpoint: ApiEndpoint) -> ApiEndpoint:
        """Inserts a new record and flushes it."""
        self.session.add(endpoint)
        await self._flush("create")
        return endpoint

    async def update(self, endpoint: ApiEndpoint, **values) -> ApiEndpoint:
        """Assigns the given column values to a loaded record and flushes."""
        for column, value in values.items():
            setattr(endpoint, column, value)
        await self._flush("update")
        return endpoint

    async def delete(self, endpoint: ApiEndpoint) -> None:
        """Deletes a loaded record and flushes."""
        try:
            await self.session.delete(endpoint)
        except SQLAlchemyError as e:
            raise StorageError("delete", original=e) from e
        await self._flush("delete")

    async def _flush(self, operation: str) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            # The failed flush leaves the session unusable until rollback
            await self.session.rollback()
            if is_unique_violation(e):
                raise UniqueConstraintViolation(operation, original=e) from e
            raise StorageError(operation, original=e) from e
        except SQLAlchemyError as e:
            raise StorageError(operation, original=e) from e
