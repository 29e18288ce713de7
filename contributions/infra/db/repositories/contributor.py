"""
Contribution store.

Tracks when a uid started a contribution and whether it finished or expired.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from contributions.config import WriteErrorPolicy
from contributions.infra.db.errors import DatabaseError
from contributions.infra.db.models.contributor import Contributor
from contributions.infra.db.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

# Failures raised by SQLAlchemy, plus those the driver raises unwrapped while
# binding parameters (e.g. a uid that cannot be encoded as UTF-8)
STORE_ERRORS = (SQLAlchemyError, UnicodeError, ValueError)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a mutation. Callers are free to ignore it."""
    ok: bool
    rows_affected: int = 0
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return not self.ok


class ContributionStore(BaseRepository[Contributor]):
    """
    Facade over the ``contributors`` table.

    ``has_contributed`` and ``get_contributor`` raise ``DatabaseError`` when the
    query cannot be executed. The mutations are best-effort: what happens to
    a database error depends on ``error_policy``, and under the default
    ``IGNORE`` policy the caller only learns about it through the returned
    ``WriteResult``.

    Usage:
        store = ContributionStore(session_factory)
        await store.insert_contributor("alice")
        if await store.has_contributed("alice"):
            ...
        await store.finish_contribution("alice")
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        error_policy: WriteErrorPolicy = WriteErrorPolicy.IGNORE,
        exclusive_outcomes: bool = False,
    ):
        super().__init__(Contributor, session_factory)
        self.error_policy = error_policy
        self.exclusive_outcomes = exclusive_outcomes

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def has_contributed(self, uid: str) -> bool:
        """True if any row exists for uid, whatever its terminal state."""
        try:
            return await self.exists_where(Contributor.uid == uid)
        except STORE_ERRORS as e:
            raise DatabaseError.from_exception(e) from e

    async def get_contributor(self, uid: str) -> Optional[Contributor]:
        """Get the earliest started row for uid, or None."""
        try:
            return await self.first_where(
                Contributor.uid == uid,
                order_by=Contributor.started_at.asc(),
            )
        except STORE_ERRORS as e:
            raise DatabaseError.from_exception(e) from e

    async def count_contributors(self, uid: Optional[str] = None) -> int:
        """Count rows, for every uid or for a single one."""
        criteria = () if uid is None else (Contributor.uid == uid,)
        try:
            return await self.count(*criteria)
        except STORE_ERRORS as e:
            raise DatabaseError.from_exception(e) from e

    # ------------------------------------------------------------------
    # Mutations (best-effort)
    # ------------------------------------------------------------------

    async def insert_contributor(self, uid: str) -> WriteResult:
        """Record that uid started a contribution now."""
        try:
            rows = await self.insert_values(uid=uid, started_at=utcnow())
        except STORE_ERRORS as e:
            return self._write_failed("insert_contributor", uid, e)
        logger.debug("Inserted contributor %s", uid)
        return WriteResult(ok=True, rows_affected=rows)

    async def finish_contribution(self, uid: str) -> WriteResult:
        """Mark the contribution of uid as finished now."""
        return await self._set_outcome("finish_contribution", uid, finished_at=utcnow())

    async def expire_contribution(self, uid: str) -> WriteResult:
        """Mark the contribution of uid as expired now."""
        return await self._set_outcome("expire_contribution", uid, expired_at=utcnow())

    async def _set_outcome(self, operation: str, uid: str, **values) -> WriteResult:
        criteria = [Contributor.uid == uid]
        if self.exclusive_outcomes:
            criteria.append(Contributor.finished_at.is_(None))
            criteria.append(Contributor.expired_at.is_(None))
        try:
            rows = await self.update_where(tuple(criteria), **values)
        except STORE_ERRORS as e:
            return self._write_failed(operation, uid, e)
        # No matching row is not an error
        logger.debug("%s(%s) updated %d row(s)", operation, uid, rows)
        return WriteResult(ok=True, rows_affected=rows)

    def _write_failed(self, operation: str, uid: str, exc: Exception) -> WriteResult:
        if self.error_policy == WriteErrorPolicy.RAISE:
            raise DatabaseError.from_exception(exc) from exc
        if self.error_policy == WriteErrorPolicy.LOG:
            logger.warning("%s failed for uid %s: %s", operation, uid, exc)
        return WriteResult(ok=False, error=str(exc))
