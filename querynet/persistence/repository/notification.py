"""PostgreSQL implementation of Notification repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from querynet.domain.model import Notification
from querynet.domain.repository import NotificationRepository
from querynet.domain.value import NotificationId, UserId
from querynet.persistence.mappers import notification_to_dict, row_to_notification
from querynet.persistence.tables import notifications_table


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, notification: Notification) -> Notification:
        """Insert a notification inside a savepoint.

        If the insert fails only the savepoint is rolled back, and the
        request transaction stays usable.
        """
        stmt = insert(notifications_table).values(**notification_to_dict(notification))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return notification

    async def find_for_recipient(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> Optional[Notification]:
        stmt = select(notifications_table).where(
            notifications_table.c.id == notification_id,
            notifications_table.c.recipient_id == recipient_id,
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_notification(row._asdict()) if row else None

    async def find_by_recipient(
        self,
        recipient_id: UserId,
        is_read: Optional[bool] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Notification]:
        """List notifications newest first."""
        stmt = select(notifications_table).where(
            notifications_table.c.recipient_id == recipient_id
        )
        if is_read is not None:
            stmt = stmt.where(notifications_table.c.is_read == is_read)
        stmt = (
            stmt.order_by(desc(notifications_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_notification(row._asdict()) for row in result.fetchall()]

    async def count_by_recipient(
        self, recipient_id: UserId, is_read: Optional[bool] = None
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(notifications_table)
            .where(notifications_table.c.recipient_id == recipient_id)
        )
        if is_read is not None:
            stmt = stmt.where(notifications_table.c.is_read == is_read)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def set_read_state(
        self,
        notification_id: NotificationId,
        recipient_id: UserId,
        is_read: bool,
        at: datetime,
    ) -> Optional[Notification]:
        stmt = (
            update(notifications_table)
            .where(
                notifications_table.c.id == notification_id,
                notifications_table.c.recipient_id == recipient_id,
            )
            .values(is_read=is_read, read_at=at if is_read else None)
            .returning(*notifications_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_notification(row._asdict()) if row else None

    async def mark_all_read(self, recipient_id: UserId, at: datetime) -> int:
        """Single UPDATE over the recipient's unread notifications."""
        stmt = (
            update(notifications_table)
            .where(
                notifications_table.c.recipient_id == recipient_id,
                notifications_table.c.is_read.is_(False),
            )
            .values(is_read=True, read_at=at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def delete_for_recipient(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> bool:
        stmt = delete(notifications_table).where(
            notifications_table.c.id == notification_id,
            notifications_table.c.recipient_id == recipient_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
