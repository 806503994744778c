"""
Townhall Backend — Generic Repository
=======================================

What:  CRUD operations shared by every entity repository.
How:   Wraps an AsyncSession. Writes are flushed (not committed) so ids are
       assigned immediately; the request-scoped session commits at the end.

Contract:
    create(record)          → stored record with its id
    find_by_id(id)          → record or None
    find_all(limit, offset) → list of records
    update(id, values)      → updated record or None
    delete(id)              → True, or False when nothing matched
    count()                 → number of rows

Error translation:
    IntegrityError  → ConflictError (unique or foreign key violation)
    SQLAlchemyError → DatabaseError (generic message, details logged)
"""

import logging
from typing import Any, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from townhall.database import Base
from townhall.exceptions import ConflictError, DatabaseError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def contains_pattern(term: str) -> str:
    """LIKE pattern matching ``term`` anywhere, with wildcards escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class Repository(Generic[ModelT]):
    """
    Base repository. Subclasses set ``model`` and ``resource`` and add
    entity-specific queries on top of the helpers below.
    """

    model: Type[ModelT]
    resource: str = "resource"

    def __init__(self, session: AsyncSession):
        self.session = session

    # ── CRUD ──────────────────────────────────────────────────────────────

    async def create(self, record: ModelT) -> ModelT:
        self.session.add(record)
        await self._flush("create")
        return record

    async def find_by_id(self, record_id: int) -> Optional[ModelT]:
        try:
            return await self.session.get(self.model, record_id)
        except SQLAlchemyError as e:
            raise self._database_error("find_by_id", e) from e

    async def find_all(
        self, limit: Optional[int] = None, offset: int = 0
    ) -> List[ModelT]:
        stmt = select(self.model).order_by(*self.default_order())
        return await self._scalars(self._paginate(stmt, limit, offset))

    async def count(self) -> int:
        return await self._count(select(self.model))

    async def exists(self, record_id: int) -> bool:
        return await self.find_by_id(record_id) is not None

    async def update(
        self, record_id: int, values: Mapping[str, Any]
    ) -> Optional[ModelT]:
        """Overwrite the given attributes. Returns None if the row is missing."""
        record = await self.find_by_id(record_id)
        if record is None:
            return None
        for key, value in values.items():
            setattr(record, key, value)
        await self._flush("update")
        return record

    async def delete(self, record_id: int) -> bool:
        record = await self.find_by_id(record_id)
        if record is None:
            return False
        await self.session.delete(record)
        await self._flush("delete")
        return True

    # ── Query helpers ─────────────────────────────────────────────────────

    def default_order(self) -> Sequence[Any]:
        return (self.model.id,)

    @staticmethod
    def _paginate(stmt: Select, limit: Optional[int], offset: int) -> Select:
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return stmt

    async def _execute(self, stmt, operation: str):
        try:
            return await self.session.execute(stmt)
        except IntegrityError as e:
            raise self._conflict(e) from e
        except SQLAlchemyError as e:
            raise self._database_error(operation, e) from e

    async def _scalars(self, stmt: Select) -> List[ModelT]:
        result = await self._execute(stmt, "select")
        return list(result.scalars().all())

    async def _count(self, stmt: Select) -> int:
        """Row count of ``stmt`` ignoring its ordering and pagination."""
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        result = await self._execute(count_stmt, "count")
        return result.scalar() or 0

    async def _flush(self, operation: str) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise self._conflict(e) from e
        except SQLAlchemyError as e:
            raise self._database_error(operation, e) from e

    def _conflict(self, error: IntegrityError) -> ConflictError:
        logger.warning("Integrity error on %s: %s", self.resource, error.orig)
        return ConflictError(resource=self.resource)

    def _database_error(self, operation: str, error: Exception) -> DatabaseError:
        logger.error(
            "Database error during %s on %s: %s",
            operation,
            self.resource,
            str(error),
            exc_info=True,
        )
        return DatabaseError(
            context={
                "resource": self.resource,
                "operation": operation,
                "error_type": type(error).__name__,
            },
        )
