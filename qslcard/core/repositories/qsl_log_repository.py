"""
QSL log repository for QSL Card Manager.

All queries here are scoped to the owning operator.
"""

from typing import Any, Iterable, List, Optional, Set, Tuple

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.models import QslLog
from .base import BaseRepository

# Public sort keys (camelCase and snake_case) mapped to columns
SORTABLE_FIELDS = {
    "date": QslLog.date,
    "time": QslLog.time,
    "contactCall": QslLog.contact_call,
    "contact_call": QslLog.contact_call,
    "contactName": QslLog.contact_name,
    "contact_name": QslLog.contact_name,
    "band": QslLog.band,
    "mode": QslLog.mode,
    "frequency": QslLog.frequency,
    "createdAt": QslLog.created_at,
    "created_at": QslLog.created_at,
}

SEARCH_COLUMNS = (
    QslLog.contact_call,
    QslLog.contact_name,
    QslLog.qth,
    QslLog.band,
    QslLog.mode,
)

DuplicateKey = Tuple[str, Any, str, str, str]


def contains_pattern(term: str) -> str:
    """LIKE pattern matching ``term`` literally anywhere, escaped with ``\\``."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def duplicate_key(
    contact_call: str, date: Any, time: str, band: str, mode: str
) -> DuplicateKey:
    """Build the key two logs must share to count as the same contact."""
    return (contact_call.upper(), date, time, band.lower(), mode.upper())


class QslLogRepository(BaseRepository[QslLog]):
    """Repository for contact log entries."""

    def __init__(self, session: AsyncSession):
        """Initialize QSL log repository with session."""
        super().__init__(session, QslLog)

    async def get_for_user(self, log_id: int, user_id: int) -> Optional[QslLog]:
        """
        Get a log entry only if it belongs to the user.

        Args:
            log_id: Log identifier
            user_id: Owner identifier

        Returns:
            Log entry or None if missing or owned by someone else
        """
        stmt = select(QslLog).where(QslLog.id == log_id, QslLog.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_many_for_user(
        self, log_ids: Iterable[int], user_id: int
    ) -> List[QslLog]:
        """
        Get the user's log entries among the given IDs.

        IDs belonging to other users are silently dropped. The result keeps
        the order of ``log_ids``.
        """
        ids = list(dict.fromkeys(log_ids))
        if not ids:
            return []
        stmt = select(QslLog).where(QslLog.id.in_(ids), QslLog.user_id == user_id)
        result = await self.session.execute(stmt)
        by_id = {log.id: log for log in result.scalars().all()}
        return [by_id[log_id] for log_id in ids if log_id in by_id]

    async def search(
        self,
        user_id: int,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
        sort_by: str = "date",
        sort_order: str = "desc",
    ) -> Tuple[List[QslLog], int]:
        """
        Get one page of the user's logs.

        Args:
            user_id: Owner identifier
            page: 1-based page number
            page_size: Entries per page
            search: Case-insensitive substring matched against call, name,
                QTH, band and mode
            sort_by: Key from ``SORTABLE_FIELDS``
            sort_order: ``asc`` or ``desc``

        Returns:
            Tuple of (entries on the page, total matching entries)
        """
        conditions: List[Any] = [QslLog.user_id == user_id]
        if search and search.strip():
            pattern = contains_pattern(search.strip())
            conditions.append(
                or_(*(col.ilike(pattern, escape="\\") for col in SEARCH_COLUMNS))
            )
        where = and_(*conditions)

        count_stmt = select(func.count()).select_from(QslLog).where(where)
        total = int((await self.session.execute(count_stmt)).scalar_one())

        column = SORTABLE_FIELDS[sort_by]
        descending = sort_order == "desc"
        order = [column.desc() if descending else column.asc()]
        if column is QslLog.date:
            order.append(QslLog.time.desc() if descending else QslLog.time.asc())
        order.append(QslLog.id.desc() if descending else QslLog.id.asc())

        stmt = (
            select(QslLog)
            .where(where)
            .order_by(*order)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def existing_keys(
        self, user_id: int, contact_calls: Iterable[str]
    ) -> Set[DuplicateKey]:
        """
        Get duplicate keys of stored logs for the given calls.

        Args:
            user_id: Owner identifier
            contact_calls: Calls appearing in an import batch

        Returns:
            Set of keys built with ``duplicate_key``
        """
        calls = {call.upper() for call in contact_calls}
        if not calls:
            return set()
        stmt = select(
            QslLog.contact_call, QslLog.date, QslLog.time, QslLog.band, QslLog.mode
        ).where(QslLog.user_id == user_id, QslLog.contact_call.in_(calls))
        result = await self.session.execute(stmt)
        return {duplicate_key(*row) for row in result.all()}
